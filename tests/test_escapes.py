"""Test escape sequences in literals and their decoding."""

import pytest

from asllex.errors import InvalidEscapeSequence
from asllex.scanner import tokenize
from asllex.strings import ESCAPES, literal_value, unescape
from asllex.tokens import ESCAPE_CHARS, TokenType


class TestEscapeTables:
    def test_scanner_and_decoder_agree(self):
        assert set(ESCAPES) == set(ESCAPE_CHARS)


class TestInvalidEscapes:
    def test_invalid_char_escape(self):
        with pytest.raises(InvalidEscapeSequence, match="invalid escape sequence") as exc_info:
            tokenize("'\\q'")
        err = exc_info.value
        assert err.position.column == 2
        assert err.text == "\\q"

    def test_invalid_string_escape(self):
        with pytest.raises(InvalidEscapeSequence) as exc_info:
            tokenize('x = "ab\\qc"')
        err = exc_info.value
        assert err.position.column == 8
        assert err.text == "\\q"

    def test_first_bad_escape_reported(self):
        with pytest.raises(InvalidEscapeSequence) as exc_info:
            tokenize('"\\x\\y"')
        assert exc_info.value.text == "\\x"

    def test_bad_escape_in_unterminated_string(self):
        with pytest.raises(InvalidEscapeSequence):
            tokenize('"\\z')

    def test_digit_escape_is_invalid(self):
        with pytest.raises(InvalidEscapeSequence):
            tokenize('"\\0"')


class TestUnescape:
    def test_no_escapes(self):
        assert unescape("plain") == "plain"

    def test_empty(self):
        assert unescape("") == ""

    def test_all_escapes(self):
        assert unescape("\\n\\t\\\\\\'\\\"\\r\\f\\b") == "\n\t\\'\"\r\f\b"

    def test_mixed(self):
        assert unescape("a\\nb") == "a\nb"

    def test_invalid(self):
        with pytest.raises(ValueError, match="invalid escape"):
            unescape("\\q")

    def test_trailing_backslash(self):
        with pytest.raises(ValueError, match="trailing backslash"):
            unescape("abc\\")


class TestLiteralValue:
    def _first(self, source: str):
        return tokenize(source, hidden=False)[0]

    def test_int(self):
        assert literal_value(self._first("42")) == 42

    def test_float(self):
        assert literal_value(self._first("2.5")) == 2.5

    def test_bool(self):
        assert literal_value(self._first("true")) is True
        assert literal_value(self._first("false")) is False

    def test_char(self):
        assert literal_value(self._first("'\\n'")) == "\n"

    def test_string(self):
        tok = self._first('"a\\tb"')
        assert tok.type == TokenType.STRINGVAL
        assert literal_value(tok) == "a\tb"

    def test_not_a_literal(self):
        with pytest.raises(ValueError, match="ID"):
            literal_value(self._first("x"))
