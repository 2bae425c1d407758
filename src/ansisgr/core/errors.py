"""Exceptions raised while parsing ANSI-formatted text."""

from __future__ import annotations

from ansisgr.constants import ERROR_SNIPPET_WIDTH


class ParseError(Exception):
    """Base error raised by the ansisgr parser."""


class MalformedEscapeSequence(ParseError):
    """An escape introducer was not followed by a valid SGR sequence.

    Attributes:
        offset: 0-based index into the input where parsing failed
        line: 1-based line number of ``offset``
        column: 1-based column number of ``offset``
        expected: Descriptions of what would have been accepted at ``offset``
        snippet: Input text immediately before and at ``offset``
    """

    def __init__(
        self,
        offset: int,
        line: int,
        column: int,
        expected: tuple[str, ...],
        snippet: str = "",
    ) -> None:
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = expected
        self.snippet = snippet
        super().__init__(self.describe())

    @classmethod
    def at(cls, text: str, offset: int, expected: tuple[str, ...]) -> MalformedEscapeSequence:
        """Build the error for ``offset`` in ``text``, computing line/column."""
        line = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        column = offset - line_start + 1
        start = max(line_start, offset - ERROR_SNIPPET_WIDTH)
        snippet = text[start:offset + 1]
        return cls(offset, line, column, expected, snippet)

    def describe(self) -> str:
        """Render a human-readable diagnostic."""
        if len(self.expected) > 1:
            wanted = ", ".join(self.expected[:-1]) + " or " + self.expected[-1]
        elif self.expected:
            wanted = self.expected[0]
        else:
            wanted = "a valid SGR sequence"
        message = f"line {self.line}, column {self.column}: expected {wanted}"
        if self.snippet:
            message += f" near {self.snippet!r}"
        return message
