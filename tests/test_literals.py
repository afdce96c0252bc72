"""Test numeric, character, and string literals."""

import pytest

from asllex.errors import (
    MalformedFloatLiteral,
    UnexpectedCharacter,
    UnterminatedCharLiteral,
    UnterminatedStringLiteral,
)
from asllex.scanner import tokenize
from asllex.tokens import TokenType

from tests.conftest import assert_types, assert_values


class TestNumbers:
    def test_integer(self, lex):
        tokens = lex("3")
        assert_types(tokens, [TokenType.INTVAL])
        assert_values(tokens, ["3"])

    def test_multi_digit_integer(self, lex):
        assert_values(lex("007"), ["007"])

    def test_float(self, lex):
        tokens = lex("3.14")
        assert_types(tokens, [TokenType.FLOATVAL])
        assert_values(tokens, ["3.14"])

    def test_float_followed_by_operator(self, lex):
        tokens = lex("0.5*2")
        assert_types(tokens, [TokenType.FLOATVAL, TokenType.MUL, TokenType.INTVAL])

    def test_missing_fraction_is_error(self):
        with pytest.raises(MalformedFloatLiteral) as exc_info:
            tokenize("3.")
        err = exc_info.value
        assert err.position.column == 1
        assert err.text == "3."

    def test_letter_after_dot_is_error(self):
        with pytest.raises(MalformedFloatLiteral):
            tokenize("x = 3.x")

    def test_no_exponent(self, lex):
        tokens = lex("1e5")
        assert_types(tokens, [TokenType.INTVAL, TokenType.ID])
        assert_values(tokens, ["1", "e5"])

    def test_second_dot_is_unexpected(self):
        with pytest.raises(UnexpectedCharacter) as exc_info:
            tokenize("1.2.3")
        assert exc_info.value.position.column == 4


class TestCharLiterals:
    def test_plain(self, lex):
        tokens = lex("'a'")
        assert_types(tokens, [TokenType.CHARVAL])
        assert tokens[0].value == "a"
        assert tokens[0].raw == "'a'"

    def test_space(self, lex):
        assert_values(lex("' '"), [" "])

    def test_double_quote_unescaped(self, lex):
        assert_values(lex("'\"'"), ['"'])

    @pytest.mark.parametrize("code", list("nt\\'\"rfb"))
    def test_escape(self, lex, code):
        tokens = lex(f"'\\{code}'")
        assert_types(tokens, [TokenType.CHARVAL])
        assert tokens[0].value == f"\\{code}"

    def test_empty(self):
        with pytest.raises(UnterminatedCharLiteral, match="empty"):
            tokenize("''")

    def test_two_characters(self):
        with pytest.raises(UnterminatedCharLiteral, match="closing quote"):
            tokenize("'ab'")

    def test_missing_close(self):
        with pytest.raises(UnterminatedCharLiteral):
            tokenize("'a")

    def test_quote_at_end_of_input(self):
        with pytest.raises(UnterminatedCharLiteral):
            tokenize("'")

    def test_backslash_at_end_of_input(self):
        with pytest.raises(UnterminatedCharLiteral):
            tokenize("'\\")

    def test_unescaped_backslash(self):
        with pytest.raises(UnterminatedCharLiteral):
            tokenize("'\\'")


class TestStringLiterals:
    def test_plain(self, lex):
        tokens = lex('"hello world"')
        assert_types(tokens, [TokenType.STRINGVAL])
        assert tokens[0].value == "hello world"
        assert tokens[0].raw == '"hello world"'

    def test_empty(self, lex):
        tokens = lex('""')
        assert_types(tokens, [TokenType.STRINGVAL])
        assert tokens[0].value == ""

    def test_escape_kept_verbatim(self, lex):
        tokens = lex('"a\\nb"')
        assert_types(tokens, [TokenType.STRINGVAL])
        assert tokens[0].value == "a\\nb"
        assert tokens[0].raw == '"a\\nb"'

    def test_escaped_quote(self, lex):
        tokens = lex('"say \\"hi\\""')
        assert_types(tokens, [TokenType.STRINGVAL])
        assert tokens[0].value == 'say \\"hi\\"'

    def test_single_quote_inside(self, lex):
        assert_values(lex('"it\'s"'), ["it's"])

    def test_keywords_inside_string(self, lex):
        tokens = lex('write "while do";', hidden=False)
        assert_types(tokens, [TokenType.WRITE, TokenType.STRINGVAL, TokenType.SEMI])

    def test_unterminated(self):
        with pytest.raises(UnterminatedStringLiteral) as exc_info:
            tokenize('"unterminated')
        assert exc_info.value.position.column == 1
        assert exc_info.value.text == '"unterminated'

    def test_unterminated_at_end_of_line(self):
        with pytest.raises(UnterminatedStringLiteral) as exc_info:
            tokenize('"abc\ndef"')
        assert exc_info.value.position.line == 1

    def test_trailing_backslash(self):
        with pytest.raises(UnterminatedStringLiteral):
            tokenize('"abc\\')

    def test_escaped_quote_then_end(self):
        with pytest.raises(UnterminatedStringLiteral):
            tokenize('"abc\\"')
