"""Configuration CLI commands.

Provides the `ansisgr config` sub-commands for viewing the effective
configuration.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape

from ansisgr.cli.formatters import console, is_json_mode, print_error, print_info, print_json

app = typer.Typer(help="Inspect ansisgr configuration", no_args_is_help=True)


@app.command("show")
def config_show(
    section: Optional[str] = typer.Argument(None, help="Config section (e.g. 'parse', 'render')"),
) -> None:
    """Show effective configuration (merged from all sources).

    Examples:
        ansisgr config show
        ansisgr config show render
    """
    from ansisgr.cli.app import state

    config_dict = state.config.model_dump(mode="json")

    if section:
        if section in config_dict:
            data = {section: config_dict[section]}
        else:
            print_error(f"Unknown config section: {escape(section)}")
            print_info(f"Available sections: {', '.join(config_dict.keys())}")
            raise typer.Exit(1)
    else:
        data = config_dict

    if is_json_mode():
        print_json(data)
        return

    from rich.panel import Panel

    lines: list[str] = []
    _format_dict(data, lines, indent=0)

    panel = Panel(
        "\n".join(lines),
        title="ansisgr Configuration",
        title_align="left",
        border_style="blue",
    )
    console.print(panel)


@app.command("path")
def config_path() -> None:
    """Show where configuration files are looked up."""
    from ansisgr.constants import GLOBAL_CONFIG, PROJECT_CONFIG
    from ansisgr.core.config import find_project_config

    project = find_project_config()
    if is_json_mode():
        print_json({
            "global": str(GLOBAL_CONFIG),
            "project": str(project) if project else None,
        })
        return

    console.print(f"[bold]Global:[/bold] {GLOBAL_CONFIG}")
    if project:
        console.print(f"[bold]Project:[/bold] {project}")
    else:
        console.print(f"[bold]Project:[/bold] [dim]none ({PROJECT_CONFIG} not found)[/dim]")


def _format_dict(data: dict, lines: list[str], indent: int = 0) -> None:
    """Recursively format a dict for display."""
    prefix = "  " * indent
    for key, value in data.items():
        if isinstance(value, dict):
            lines.append(f"{prefix}[bold]{key}:[/bold]")
            _format_dict(value, lines, indent + 1)
        else:
            lines.append(f"{prefix}[bold]{key}:[/bold] {value}")
