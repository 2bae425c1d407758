"""ansisgr CLI: Root Typer Application.

This is the entry point for the ``ansisgr`` command. It defines the main Typer
app, global options (--json, --verbose, --config), and lazy-initialised shared
state that subcommands access via ``from ansisgr.cli.app import state``.

Subcommand registration:
- ``ansisgr config ...`` is mounted as a Typer sub-group.
- ``render``, ``tokens`` and ``version`` are registered directly on the root
  app so they appear as top-level ``ansisgr <command>`` invocations.
"""

from __future__ import annotations

import logging

import typer
from rich.markup import escape

from ansisgr import __version__
from ansisgr.cli.formatters import console, is_json_mode, print_error, print_json, set_json_mode

# ---------------------------------------------------------------------------
# Main Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="ansisgr",
    help="ansisgr: turn ANSI SGR colored text into styled segments.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ---------------------------------------------------------------------------
# Global state (lazy-initialised, accessible as ``from ansisgr.cli.app import state``)
# ---------------------------------------------------------------------------


class AppState:
    """Shared state populated by the root callback and consumed by every
    subcommand. The merged configuration is loaded on first access.
    """

    def __init__(self) -> None:
        self.json_mode: bool = False
        self.verbose: bool = False
        self.config_path: str | None = None

        self._config = None

    @property
    def config(self):
        """Load and cache the merged AnsiSgrConfig."""
        if self._config is None:
            from ansisgr.core.config import load_config

            overrides: dict = {}
            if self.verbose:
                overrides["log_level"] = "debug"
            self._config = load_config(self.config_path, **overrides)
        return self._config

    def reset(self) -> None:
        """Drop cached objects (used between invocations in tests)."""
        self._config = None


state = AppState()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logging.getLogger("ansisgr").setLevel(level)


# ---------------------------------------------------------------------------
# Root callback: processes global options before any subcommand runs
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON instead of Rich output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output (debug logging).",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Path to a TOML config file (layered over the default locations).",
    ),
) -> None:
    """ansisgr: ANSI SGR parser."""
    state.reset()
    state.json_mode = json_output
    state.verbose = verbose
    state.config_path = config
    set_json_mode(json_output)

    if ctx.invoked_subcommand in (None, "version"):
        return

    try:
        config_obj = state.config
    except ValueError as e:
        print_error(escape(f"Invalid configuration: {e}"))
        raise typer.Exit(1)

    _configure_logging(config_obj.general.log_level)


# ---------------------------------------------------------------------------
# Register subcommand groups and top-level commands
# ---------------------------------------------------------------------------

from ansisgr.cli import render_cmd  # noqa: E402

app.command(name="render")(render_cmd.render)
app.command(name="tokens")(render_cmd.tokens)

from ansisgr.cli import config_cmd  # noqa: E402

app.add_typer(config_cmd.app, name="config", help="Inspect ansisgr configuration.")


@app.command(name="version")
def version() -> None:
    """Show ansisgr version."""
    if is_json_mode():
        print_json({"version": __version__})
        return
    console.print(f"[bold]ansisgr[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point (referenced by ``[project.scripts]`` in pyproject.toml)."""
    app()
