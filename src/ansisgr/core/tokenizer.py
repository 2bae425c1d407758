"""Tokenizer splitting ANSI-formatted text into content runs and SGR commands.

Grammar (tokens abut, no separators):

    tokens  := (content | sgr)*
    content := [^ESC]+
    sgr     := ESC '[' (INT (';' INT)*)? 'm'
    INT     := [0-9]+

Any ESC that does not start a well-formed ``sgr`` fails the whole input with
:class:`MalformedEscapeSequence`. There is no resynchronisation.
"""

from __future__ import annotations

import re
from typing import Iterator

from ansisgr.constants import ESC, PARAM_SEPARATOR, SGR_FINAL
from ansisgr.core.errors import MalformedEscapeSequence
from ansisgr.core.models import SGR, AnsiToken, Content

_CONTENT_RE = re.compile(r"[^\x1b]+")
_SGR_RE = re.compile(r"\x1b\[((?:[0-9]+(?:;[0-9]+)*)?)m")

_DIGIT = "a digit"
_SEMICOLON = f"'{PARAM_SEPARATOR}'"
_FINAL = f"'{SGR_FINAL}'"

# Longer parameters (leading zeros aside) collapse to OVERSIZED_CODE, a no-op
MAX_PARAM_DIGITS = 9
OVERSIZED_CODE = 10**MAX_PARAM_DIGITS


def _to_code(param: str) -> int:
    """Convert one parameter, mapping oversized values to OVERSIZED_CODE."""
    significant = param.lstrip("0")
    if len(significant) > MAX_PARAM_DIGITS:
        return OVERSIZED_CODE
    return int(significant or "0")


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return "0" <= ch <= "9"


def _locate_error(text: str, start: int) -> MalformedEscapeSequence:
    """Walk the bad sequence at ``start`` to find where and why it fails."""
    end = len(text)
    pos = start + 1

    if pos >= end or text[pos] != "[":
        return MalformedEscapeSequence.at(text, pos, ("'['",))
    pos += 1

    if pos >= end or not _is_digit(text[pos]):
        return MalformedEscapeSequence.at(text, pos, (_DIGIT, _FINAL))

    while True:
        while pos < end and _is_digit(text[pos]):
            pos += 1
        if pos < end and text[pos] == PARAM_SEPARATOR:
            pos += 1
            if pos >= end or not _is_digit(text[pos]):
                return MalformedEscapeSequence.at(text, pos, (_DIGIT,))
            continue
        return MalformedEscapeSequence.at(text, pos, (_DIGIT, _SEMICOLON, _FINAL))


def iter_tokens(text: str) -> Iterator[AnsiToken]:
    """Lazily yield tokens from ``text``.

    Raises:
        MalformedEscapeSequence: When an escape sequence is reached that is
            not a valid SGR command. Tokens before it have already been
            yielded.
    """
    pos = 0
    end = len(text)

    while pos < end:
        if text[pos] != ESC:
            m = _CONTENT_RE.match(text, pos)
            yield Content(text=m.group(0))
            pos = m.end()
            continue

        m = _SGR_RE.match(text, pos)
        if m is None:
            raise _locate_error(text, pos)

        params = m.group(1)
        codes = tuple(_to_code(p) for p in params.split(PARAM_SEPARATOR)) if params else ()
        yield SGR(codes=codes)
        pos = m.end()


def tokenize(text: str) -> list[AnsiToken]:
    """Split ``text`` into content and SGR tokens.

    Args:
        text: Input potentially containing ``ESC [ ... m`` sequences.

    Returns:
        Tokens in input order.

    Raises:
        MalformedEscapeSequence: If any escape sequence is malformed; no
            partial token list is returned.

    Examples:
        >>> tokenize("\\x1b[1;31mhi")
        [SGR(kind='sgr', codes=(1, 31)), Content(kind='content', text='hi')]
    """
    return list(iter_tokens(text))
