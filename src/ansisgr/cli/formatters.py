"""
ansisgr CLI - Rich-based Output Formatting

Provides both Rich (terminal) and JSON output formatting for the CLI commands.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ansisgr.core.models import SGR, AnsiToken, Content, Format, Segment

# Console instances for normal and error output
console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)

# Global state for JSON mode
_json_mode = False


def set_json_mode(enabled: bool) -> None:
    """Enable or disable JSON output mode."""
    global _json_mode
    _json_mode = enabled


def is_json_mode() -> bool:
    """Check if JSON output mode is enabled."""
    return _json_mode


# --- Basic output functions ---

def print_error(message: str) -> None:
    """Print an error message in red to stderr."""
    if _json_mode:
        print_json({"status": "error", "message": message})
    else:
        error_console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    """Print an informational message."""
    if _json_mode:
        print_json({"status": "info", "message": message})
    else:
        console.print(f"[cyan]ℹ[/cyan] {message}")


def print_json(data: Any) -> None:
    """Print any data as formatted JSON."""
    print(json.dumps(data, indent=2, default=str))


# --- Format and token formatting ---

def segments_payload(
    segments: list[Segment], trailing: Optional[Format]
) -> dict[str, Any]:
    """JSON-ready representation of a parse result."""
    return {
        "segments": [
            {"format": fmt.model_dump(mode="json"), "text": text}
            for fmt, text in segments
        ],
        "trailing_format": trailing.model_dump(mode="json") if trailing is not None else None,
    }


def print_token_list(tokens: list[AnsiToken]) -> None:
    """Print tokens as a Rich table or JSON array."""
    if _json_mode:
        print_json([t.model_dump(mode="json") for t in tokens])
        return

    if not tokens:
        console.print("[dim]No tokens.[/dim]")
        return

    table = Table(title="Tokens", title_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", style="magenta")
    table.add_column("Value")

    for index, token in enumerate(tokens):
        if isinstance(token, SGR):
            value = ";".join(str(c) for c in token.codes) or "[dim](empty)[/dim]"
            table.add_row(str(index), "sgr", value)
        elif isinstance(token, Content):
            table.add_row(str(index), "content", Text(repr(token.text)))

    console.print(table)
