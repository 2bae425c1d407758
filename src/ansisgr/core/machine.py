"""SGR format state machine.

Folds SGR codes into the current :class:`Format` and pairs each content run
with the Format in effect at that point. The only state is the current Format,
passed in and returned explicitly so independent streams never share it.

Rule table:

    0        reset to the all-default Format
    1 / 21   bold on / off
    3 / 23   italic on / off
    4 / 24   underline on / off
    5, 6     blink on (slow and fast are not distinguished)
    7 / 27   reverse on / off
    9 / 29   strike on / off
    30-37    standard foreground       39   default foreground
    40-47    standard background       49   default background
    90-97    bright foreground         100-107  bright background
    38, 48   extended color introducers, ignored
    other    ignored
"""

from __future__ import annotations

from typing import Iterable, Optional

from ansisgr.core.models import (
    BRIGHT_COLORS,
    DEFAULT_FORMAT,
    SGR,
    STANDARD_COLORS,
    AnsiToken,
    Color,
    Content,
    Format,
    Segment,
)

# Single-attribute codes: code -> (field, value)
_ATTRIBUTE_CODES: dict[int, tuple[str, bool]] = {
    1: ("bold", True),
    3: ("italic", True),
    4: ("underline", True),
    5: ("blink", True),
    6: ("blink", True),
    7: ("reverse", True),
    9: ("strike", True),
    21: ("bold", False),
    23: ("italic", False),
    24: ("underline", False),
    27: ("reverse", False),
    29: ("strike", False),
}

# Color codes: code -> (field, color)
_COLOR_CODES: dict[int, tuple[str, Color]] = {
    39: ("foreground", Color.DEFAULT),
    49: ("background", Color.DEFAULT),
}
for _offset, _color in enumerate(STANDARD_COLORS):
    _COLOR_CODES[30 + _offset] = ("foreground", _color)
    _COLOR_CODES[40 + _offset] = ("background", _color)
for _offset, _color in enumerate(BRIGHT_COLORS):
    _COLOR_CODES[90 + _offset] = ("foreground", _color)
    _COLOR_CODES[100 + _offset] = ("background", _color)

RESET = 0


def apply_code(fmt: Format, code: int) -> Format:
    """Apply a single SGR code to ``fmt``.

    Returns ``fmt`` itself for codes without an effect (including 38 and 48).
    """
    if code == RESET:
        return DEFAULT_FORMAT

    change = _ATTRIBUTE_CODES.get(code) or _COLOR_CODES.get(code)
    if change is None:
        return fmt

    field, value = change
    if getattr(fmt, field) == value:
        return fmt
    return fmt.model_copy(update={field: value})


def apply_codes(fmt: Format, codes: Iterable[int]) -> Format:
    """Apply ``codes`` left to right, each seeing the previous result.

    An empty sequence leaves ``fmt`` unchanged; ``ESC[m`` is not treated as
    a reset.
    """
    for code in codes:
        fmt = apply_code(fmt, code)
    return fmt


def apply_tokens(
    current: Optional[Format],
    tokens: Iterable[AnsiToken],
    default: Format = DEFAULT_FORMAT,
) -> tuple[Optional[Format], list[Segment]]:
    """Fold ``tokens`` into segments, threading the current Format.

    Args:
        current: Format in effect before the first token, usually the trailing
            format of the previous chunk. ``None`` disables format tracking:
            SGR tokens are ignored and content is paired with ``default``.
        tokens: Tokens from :func:`ansisgr.core.tokenizer.tokenize`.
        default: Format given to content while tracking is disabled.

    Returns:
        Tuple of (trailing format, segments in input order). The trailing
        format is ``None`` exactly when ``current`` was ``None``.
    """
    segments: list[Segment] = []

    for token in tokens:
        if isinstance(token, SGR):
            if current is not None:
                current = apply_codes(current, token.codes)
        elif isinstance(token, Content):
            segments.append((current if current is not None else default, token.text))
        else:
            raise TypeError(f"Unexpected token type: {type(token).__name__}")

    return current, segments
