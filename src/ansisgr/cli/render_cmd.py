"""Render and token inspection commands.

These commands are registered directly on the root Typer app so they appear
as ``ansisgr render`` and ``ansisgr tokens``.
"""

from __future__ import annotations

import io
import logging
import sys
from contextlib import contextmanager
from typing import IO, Iterator, Optional

import typer
from rich.markup import escape

from ansisgr.cli.formatters import (
    console,
    print_error,
    print_json,
    print_token_list,
    segments_payload,
)
from ansisgr.core.config import OutputKind
from ansisgr.core.errors import MalformedEscapeSequence
from ansisgr.core.models import DEFAULT_FORMAT, Segment
from ansisgr.core.parser import AnsiStream, ParseMode, merge_segments, segments_text
from ansisgr.core.tokenizer import tokenize
from ansisgr.render.html import render_html
from ansisgr.render.rich_text import to_text

logger = logging.getLogger(__name__)


@contextmanager
def open_input(file: Optional[str]) -> Iterator[IO[str]]:
    """Open FILE for reading, or stdin when FILE is omitted or ``-``."""
    if file is None or file == "-":
        if isinstance(sys.stdin, io.TextIOWrapper):
            # Keep \r as content, as for files opened with newline=""
            sys.stdin.reconfigure(newline="")
        yield sys.stdin
        return

    try:
        f = open(file, "r", encoding="utf-8", newline="")
    except OSError as e:
        print_error(escape(f"Cannot read {file}: {e}"))
        raise typer.Exit(1)
    with f:
        yield f


def iter_chunks(stream: IO[str], chunk_size: int) -> Iterator[str]:
    """Yield the input in chunks of at least ``chunk_size`` characters.

    Chunks always end on a line boundary (or end of input) so an escape
    sequence is never split between two chunks. ``chunk_size`` 0 yields the
    whole input at once.
    """
    if chunk_size <= 0:
        yield stream.read()
        return

    buffered: list[str] = []
    size = 0
    for line in stream:
        buffered.append(line)
        size += len(line)
        if size >= chunk_size:
            yield "".join(buffered)
            buffered, size = [], 0
    if buffered:
        yield "".join(buffered)


def _emit(segments: list[Segment], output: OutputKind, prefix: str) -> None:
    if output is OutputKind.RICH:
        console.print(to_text(segments), end="", soft_wrap=True)
    elif output is OutputKind.HTML:
        typer.echo(render_html(segments, prefix=prefix, wrap=False), nl=False)
    elif output is OutputKind.TEXT:
        typer.echo(segments_text(segments), nl=False)


def render(
    file: Optional[str] = typer.Argument(None, help="Input file ('-' or omitted for stdin)"),
    output: Optional[OutputKind] = typer.Option(None, "--output", "-o", help="Output kind"),
    mode: Optional[ParseMode] = typer.Option(None, "--mode", "-m", help="strict or lenient error handling"),
    no_track: bool = typer.Option(False, "--no-track", help="Ignore SGR codes (format tracking off)"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", min=0, help="Parse the input in chunks of N characters"),
    merge: bool = typer.Option(False, "--merge", help="Join adjacent segments with the same format"),
) -> None:
    """Parse ANSI-formatted text and render it.

    Examples:
        ls --color=always | ansisgr render
        ansisgr render build.log --output html > build.html
        ansisgr render build.log --mode strict --chunk-size 4096
    """
    from ansisgr.cli.app import state

    config = state.config
    if state.json_mode:
        output = OutputKind.JSON
    output = output or config.render.output
    mode = mode or config.parse.mode
    chunk_size = config.stream.chunk_size if chunk_size is None else chunk_size
    merge = merge or config.render.merge
    prefix = config.render.class_prefix
    wrap = config.render.wrap

    tracking = config.parse.track_format and not no_track
    stream = AnsiStream(DEFAULT_FORMAT if tracking else None, mode=mode)
    logger.debug(
        "Rendering %s as %s (mode=%s, tracking=%s, chunk_size=%d)",
        file or "stdin", output.value, mode.value, tracking, chunk_size,
    )

    collected: list[Segment] = []
    if output is OutputKind.HTML and wrap:
        typer.echo(f'<pre class="{prefix}output">', nl=False)

    with open_input(file) as f:
        for chunk in iter_chunks(f, chunk_size):
            try:
                segments = stream.feed(chunk)
            except MalformedEscapeSequence as e:
                print_error(escape(f"Malformed escape sequence: {e}"))
                raise typer.Exit(1)

            if merge:
                segments = merge_segments(segments)
            if output is OutputKind.JSON:
                collected.extend(segments)
            else:
                _emit(segments, output, prefix)

    if output is OutputKind.JSON:
        print_json(segments_payload(collected, stream.format))
    elif output is OutputKind.HTML and wrap:
        typer.echo("</pre>")


def tokens(
    file: Optional[str] = typer.Argument(None, help="Input file ('-' or omitted for stdin)"),
) -> None:
    """Show the tokens the input splits into.

    Examples:
        printf '\\033[1;31merror\\033[0m' | ansisgr tokens
        ansisgr --json tokens build.log
    """
    with open_input(file) as f:
        text = f.read()

    try:
        token_list = tokenize(text)
    except MalformedEscapeSequence as e:
        print_error(escape(f"Malformed escape sequence: {e}"))
        raise typer.Exit(1)

    print_token_list(token_list)
