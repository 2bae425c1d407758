"""Tests for the ANSI tokenizer."""

from __future__ import annotations

import pytest

from ansisgr.core.errors import MalformedEscapeSequence, ParseError
from ansisgr.core.models import SGR, Content
from ansisgr.core.tokenizer import OVERSIZED_CODE, iter_tokens, tokenize


class TestContent:
    def test_empty_input(self):
        assert tokenize("") == []

    def test_plain_text_is_one_token(self):
        assert tokenize("Hello world") == [Content(text="Hello world")]

    def test_control_characters_are_content(self):
        text = "line1\nline2\ttab\r\x07bell\x00"
        assert tokenize(text) == [Content(text=text)]

    def test_unicode(self):
        assert tokenize("héllo ❯ 世界") == [Content(text="héllo ❯ 世界")]


class TestSGR:
    def test_single_code(self):
        assert tokenize("\x1b[31m") == [SGR(codes=(31,))]

    def test_multiple_codes(self):
        assert tokenize("\x1b[1;4;31m") == [SGR(codes=(1, 4, 31))]

    def test_empty_parameter_list(self):
        assert tokenize("\x1b[m") == [SGR(codes=())]

    def test_leading_zeros(self):
        assert tokenize("\x1b[01;031m") == [SGR(codes=(1, 31))]

    def test_large_codes_are_kept(self):
        assert tokenize("\x1b[38;5;196m") == [SGR(codes=(38, 5, 196))]

    def test_oversized_parameter_is_unknown_code(self):
        assert tokenize("\x1b[" + "9" * 5000 + "m") == [SGR(codes=(OVERSIZED_CODE,))]

    def test_long_leading_zeros(self):
        assert tokenize("\x1b[" + "0" * 5000 + "31;0000m") == [SGR(codes=(31, 0))]

    def test_oversized_among_valid_codes(self):
        assert tokenize("\x1b[1;" + "1" * 20 + ";4m") == [SGR(codes=(1, OVERSIZED_CODE, 4))]

    def test_interleaved(self):
        assert tokenize("\x1b[31mmeme\x1b[0m") == [
            SGR(codes=(31,)),
            Content(text="meme"),
            SGR(codes=(0,)),
        ]

    def test_adjacent_sequences(self):
        assert tokenize("a\x1b[1m\x1b[4mb") == [
            Content(text="a"),
            SGR(codes=(1,)),
            SGR(codes=(4,)),
            Content(text="b"),
        ]

    def test_trailing_content(self):
        tokens = tokenize("\x1b[0mdone\n")
        assert tokens[-1] == Content(text="done\n")

    def test_m_after_sequence_is_content(self):
        assert tokenize("\x1b[32mm") == [SGR(codes=(32,)), Content(text="m")]


class TestMalformed:
    def test_non_numeric_parameter(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("\x1b[abc")
        err = exc_info.value
        assert err.offset == 2
        assert err.expected == ("a digit", "'m'")

    def test_missing_terminator(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("\x1b[31")
        err = exc_info.value
        assert err.offset == 4
        assert "'m'" in err.expected
        assert "';'" in err.expected

    def test_empty_parameter(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("\x1b[1;m")
        assert exc_info.value.offset == 4
        assert exc_info.value.expected == ("a digit",)

    def test_leading_semicolon(self):
        with pytest.raises(MalformedEscapeSequence):
            tokenize("\x1b[;1m")

    def test_lone_escape(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("text\x1b")
        assert exc_info.value.offset == 5
        assert exc_info.value.expected == ("'['",)

    def test_escape_without_bracket(self):
        with pytest.raises(MalformedEscapeSequence):
            tokenize("\x1b]0;title\x07")

    def test_non_sgr_command(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("ok \x1b[2J")
        assert exc_info.value.offset == 6

    def test_error_anywhere_fails_whole_input(self):
        with pytest.raises(MalformedEscapeSequence):
            tokenize("\x1b[1mvalid text\x1b[31;xm more")

    def test_is_parse_error(self):
        with pytest.raises(ParseError):
            tokenize("\x1b[")

    def test_line_and_column(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("first line\nab\x1b[9z")
        err = exc_info.value
        assert err.line == 2
        assert err.column == 6
        assert "line 2, column 6" in str(err)

    def test_message_lists_expectations(self):
        with pytest.raises(MalformedEscapeSequence) as exc_info:
            tokenize("\x1b[31")
        assert "expected a digit, ';' or 'm'" in str(exc_info.value)

    def test_unicode_digit_rejected(self):
        with pytest.raises(MalformedEscapeSequence):
            tokenize("\x1b[٣m")


class TestIterTokens:
    def test_lazy_yields_before_error(self):
        tokens = iter_tokens("ok\x1b[zz")
        assert next(tokens) == Content(text="ok")
        with pytest.raises(MalformedEscapeSequence):
            next(tokens)
