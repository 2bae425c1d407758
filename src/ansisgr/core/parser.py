"""Parsing API combining the tokenizer and the format state machine.

Two modes are offered:

- strict: :func:`parse` raises :class:`MalformedEscapeSequence` and leaves the
  decision to the caller (reject the chunk, buffer and retry, ...).
- lenient: :func:`parse_lenient` never raises; a malformed chunk becomes a
  single segment carrying the diagnostic, and the trailing format is left
  unchanged.

Formatting state spans calls only through the returned trailing format, so a
stream is processed by threading that value from one chunk into the next. Use
:class:`AnsiStream` to have it held for you. Chunks must not split an escape
sequence.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from ansisgr.core.errors import ParseError
from ansisgr.core.machine import apply_tokens
from ansisgr.core.models import DEFAULT_FORMAT, Format, Segment
from ansisgr.core.tokenizer import tokenize

logger = logging.getLogger(__name__)


class ParseMode(str, Enum):
    """How parse errors are surfaced."""

    STRICT = "strict"
    LENIENT = "lenient"


def parse(
    text: str,
    current: Optional[Format] = DEFAULT_FORMAT,
    *,
    default: Format = DEFAULT_FORMAT,
) -> tuple[Optional[Format], list[Segment]]:
    """Parse one chunk of ANSI-formatted text.

    Args:
        text: The chunk to parse.
        current: Trailing format from the previous chunk, or ``None`` to
            disable format tracking for this call.
        default: Format paired with content while tracking is disabled.

    Returns:
        Tuple of (new trailing format, segments).

    Raises:
        MalformedEscapeSequence: If the chunk contains a malformed escape
            sequence.
    """
    try:
        tokens = tokenize(text)
    except ParseError as e:
        logger.debug("Rejected chunk of %d chars: %s", len(text), e)
        raise
    return apply_tokens(current, tokens, default)


def parse_lenient(
    text: str,
    current: Optional[Format] = DEFAULT_FORMAT,
    *,
    default: Format = DEFAULT_FORMAT,
) -> tuple[Optional[Format], list[Segment]]:
    """Parse like :func:`parse`, showing errors as text instead of raising.

    On failure the result is ``(current, [(default, diagnostic)])``.
    """
    try:
        return parse(text, current, default=default)
    except ParseError as e:
        logger.warning("Malformed escape sequence, showing diagnostic: %s", e)
        return current, [(default, str(e))]


def parse_with_mode(
    text: str,
    current: Optional[Format] = DEFAULT_FORMAT,
    *,
    mode: ParseMode = ParseMode.STRICT,
    default: Format = DEFAULT_FORMAT,
) -> tuple[Optional[Format], list[Segment]]:
    """Dispatch to :func:`parse` or :func:`parse_lenient` based on ``mode``."""
    if ParseMode(mode) is ParseMode.LENIENT:
        return parse_lenient(text, current, default=default)
    return parse(text, current, default=default)


class AnsiStream:
    """Holds the trailing format of one logical stream between chunks.

    Example:
        stream = AnsiStream()
        for chunk in chunks:
            for fmt, text in stream.feed(chunk):
                render(fmt, text)
    """

    def __init__(
        self,
        start: Optional[Format] = DEFAULT_FORMAT,
        *,
        mode: ParseMode = ParseMode.STRICT,
        default: Format = DEFAULT_FORMAT,
    ) -> None:
        self._start = start
        self._format = start
        self.mode = ParseMode(mode)
        self.default = default

    @property
    def format(self) -> Optional[Format]:
        """Trailing format after the last successfully fed chunk."""
        return self._format

    @property
    def tracking(self) -> bool:
        return self._format is not None

    def feed(self, chunk: str) -> list[Segment]:
        """Parse ``chunk`` and remember its trailing format.

        Raises:
            MalformedEscapeSequence: In strict mode; the trailing format is
                left as it was before the chunk.
        """
        self._format, segments = parse_with_mode(
            chunk, self._format, mode=self.mode, default=self.default
        )
        return segments

    def feed_all(self, chunks: Iterable[str]) -> list[Segment]:
        """Feed several chunks in order and return all their segments."""
        segments: list[Segment] = []
        for chunk in chunks:
            segments.extend(self.feed(chunk))
        return segments

    def reset(self) -> None:
        """Forget accumulated formatting and return to the starting format."""
        self._format = self._start


def segments_text(segments: Iterable[Segment]) -> str:
    """Concatenate the plain text of ``segments``."""
    return "".join(text for _, text in segments)


def merge_segments(segments: Iterable[Segment]) -> list[Segment]:
    """Join adjacent segments that share an equal Format.

    Empty segments are dropped.
    """
    merged: list[Segment] = []
    for fmt, text in segments:
        if not text:
            continue
        if merged and merged[-1][0] == fmt:
            merged[-1] = (fmt, merged[-1][1] + text)
        else:
            merged.append((fmt, text))
    return merged
