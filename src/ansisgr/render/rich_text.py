"""Rendering of parsed segments as Rich ``Text`` for terminal display."""

from __future__ import annotations

from typing import Iterable

from rich.style import Style
from rich.text import Text

from ansisgr.core.models import Color, Format, Segment


def _rich_color(color: Color) -> str | None:
    # Color values double as Rich's standard color names
    return None if color is Color.DEFAULT else color.value


def format_style(fmt: Format) -> Style:
    """Map a Format onto a Rich Style."""
    return Style(
        color=_rich_color(fmt.foreground),
        bgcolor=_rich_color(fmt.background),
        bold=fmt.bold or None,
        italic=fmt.italic or None,
        underline=fmt.underline or None,
        strike=fmt.strike or None,
        blink=fmt.blink or None,
        reverse=fmt.reverse or None,
    )


def to_text(segments: Iterable[Segment]) -> Text:
    """Build a Rich Text from segments, one styled span per segment."""
    text = Text()
    for fmt, content in segments:
        if fmt.is_default():
            text.append(content)
        else:
            text.append(content, style=format_style(fmt))
    return text
