"""
ansisgr - Core Data Models

Pydantic v2 models for colors, text formats and the tokens produced by the
tokenizer. All models are immutable so a Format can be shared freely between
segments and across streamed chunks.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, field_validator


class Color(str, Enum):
    """Terminal color. ``DEFAULT`` means no explicit color was set."""

    DEFAULT = "default"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    BRIGHT_BLACK = "bright_black"
    BRIGHT_RED = "bright_red"
    BRIGHT_GREEN = "bright_green"
    BRIGHT_YELLOW = "bright_yellow"
    BRIGHT_BLUE = "bright_blue"
    BRIGHT_MAGENTA = "bright_magenta"
    BRIGHT_CYAN = "bright_cyan"
    BRIGHT_WHITE = "bright_white"

    @property
    def is_bright(self) -> bool:
        return self.value.startswith("bright_")


# SGR palette order (offset 0-7 from 30/40/90/100)
STANDARD_COLORS: tuple[Color, ...] = (
    Color.BLACK,
    Color.RED,
    Color.GREEN,
    Color.YELLOW,
    Color.BLUE,
    Color.MAGENTA,
    Color.CYAN,
    Color.WHITE,
)

BRIGHT_COLORS: tuple[Color, ...] = (
    Color.BRIGHT_BLACK,
    Color.BRIGHT_RED,
    Color.BRIGHT_GREEN,
    Color.BRIGHT_YELLOW,
    Color.BRIGHT_BLUE,
    Color.BRIGHT_MAGENTA,
    Color.BRIGHT_CYAN,
    Color.BRIGHT_WHITE,
)


class Format(BaseModel):
    """Complete text formatting in effect for a run of content.

    Every field always has a value; resetting replaces the whole Format with
    the all-default one rather than clearing fields one by one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    foreground: Color = Color.DEFAULT
    background: Color = Color.DEFAULT
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    blink: bool = False
    reverse: bool = False

    def is_default(self) -> bool:
        """Check if this is the all-default Format."""
        return self == DEFAULT_FORMAT


DEFAULT_FORMAT = Format()


class Content(BaseModel):
    """A maximal run of literal text containing no escape byte."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["content"] = "content"
    text: str


class SGR(BaseModel):
    """Parameters of one ``ESC [ ... m`` sequence, in order of appearance."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sgr"] = "sgr"
    codes: tuple[int, ...] = ()

    @field_validator("codes")
    @classmethod
    def validate_codes(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """SGR parameters are unsigned decimal integers."""
        if any(code < 0 for code in v):
            raise ValueError("SGR codes must be non-negative")
        return v


AnsiToken = Union[Content, SGR]

# A run of text paired with the Format it is displayed with
Segment = tuple[Format, str]
