"""HTML rendering of parsed segments.

Each segment becomes a ``<span>`` whose CSS classes describe its Format, so
the look is left to a stylesheet. Class names (with the default prefix):

    ansi-bold  ansi-italic  ansi-blink
    ansi-fg-<color>  ansi-bg-<color>    (nothing for the default color)
    ansi-underline  ansi-strike  ansi-underline-strike
    ansi-fg-inverse  ansi-bg-inverse    (reverse with a default color)

Underline and strike both map onto the single CSS ``text-decoration``
property, where a later class would override an earlier one, so the pair is
emitted as one combined class.
"""

from __future__ import annotations

import html
from typing import Iterable

from ansisgr.constants import DEFAULT_CLASS_PREFIX
from ansisgr.core.models import Color, Format, Segment


def _color_class(prefix: str, layer: str, color: Color, inverse: bool) -> str | None:
    if color is not Color.DEFAULT:
        return f"{prefix}{layer}-{color.value.replace('_', '-')}"
    if inverse:
        return f"{prefix}{layer}-inverse"
    return None


def format_classes(fmt: Format, prefix: str = DEFAULT_CLASS_PREFIX) -> list[str]:
    """Return the CSS classes describing ``fmt``."""
    classes: list[str] = []

    if fmt.bold:
        classes.append(f"{prefix}bold")
    if fmt.italic:
        classes.append(f"{prefix}italic")

    if fmt.underline and fmt.strike:
        classes.append(f"{prefix}underline-strike")
    elif fmt.underline:
        classes.append(f"{prefix}underline")
    elif fmt.strike:
        classes.append(f"{prefix}strike")

    if fmt.blink:
        classes.append(f"{prefix}blink")

    fg, bg = fmt.foreground, fmt.background
    if fmt.reverse:
        fg, bg = bg, fg
    for layer, color in (("fg", fg), ("bg", bg)):
        cls = _color_class(prefix, layer, color, fmt.reverse)
        if cls:
            classes.append(cls)

    return classes


def render_segment(fmt: Format, text: str, prefix: str = DEFAULT_CLASS_PREFIX) -> str:
    """Render one segment as escaped HTML.

    Segments whose Format produces no classes are emitted as bare text.
    """
    escaped = html.escape(text, quote=False)
    classes = format_classes(fmt, prefix)
    if not classes:
        return escaped
    return f'<span class="{" ".join(classes)}">{escaped}</span>'


def render_html(
    segments: Iterable[Segment],
    prefix: str = DEFAULT_CLASS_PREFIX,
    wrap: bool = True,
) -> str:
    """Render segments as an HTML fragment.

    Args:
        segments: ``(Format, text)`` pairs in display order
        prefix: Prefix for every CSS class name
        wrap: Wrap the output in ``<pre class="<prefix>output">``

    Returns:
        HTML safe to inject as innerHTML
    """
    body = "".join(render_segment(fmt, text, prefix) for fmt, text in segments)
    if wrap:
        return f'<pre class="{prefix}output">{body}</pre>'
    return body
