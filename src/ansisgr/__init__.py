"""ansisgr - parse ANSI SGR escape sequences into styled text segments."""

from ansisgr.constants import VERSION as __version__
from ansisgr.core.errors import MalformedEscapeSequence, ParseError
from ansisgr.core.machine import apply_code, apply_codes, apply_tokens
from ansisgr.core.models import (
    DEFAULT_FORMAT,
    SGR,
    AnsiToken,
    Color,
    Content,
    Format,
    Segment,
)
from ansisgr.core.parser import (
    AnsiStream,
    ParseMode,
    merge_segments,
    parse,
    parse_lenient,
    parse_with_mode,
    segments_text,
)
from ansisgr.core.tokenizer import iter_tokens, tokenize

__all__ = [
    "__version__",
    # Models
    "AnsiToken",
    "Color",
    "Content",
    "DEFAULT_FORMAT",
    "Format",
    "SGR",
    "Segment",
    # Errors
    "MalformedEscapeSequence",
    "ParseError",
    # Tokenizer
    "iter_tokens",
    "tokenize",
    # State machine
    "apply_code",
    "apply_codes",
    "apply_tokens",
    # Parsing
    "AnsiStream",
    "ParseMode",
    "merge_segments",
    "parse",
    "parse_lenient",
    "parse_with_mode",
    "segments_text",
]
