"""ASL scanner: converts source text into a stream of classified tokens."""

from __future__ import annotations

import logging
from collections.abc import Callable

from asllex.errors import (
    InvalidEscapeSequence,
    LexError,
    MalformedFloatLiteral,
    UnexpectedCharacter,
    UnterminatedCharLiteral,
    UnterminatedStringLiteral,
)
from asllex.tokens import (
    COMPARISONS,
    DIGITS,
    ESCAPE_CHARS,
    KEYWORDS,
    LINE_ENDS,
    SINGLE_CHAR_TOKENS,
    WHITESPACE,
    Channel,
    CharClass,
    Position,
    Span,
    Token,
    TokenType,
    classify,
    is_ident_char,
)

log = logging.getLogger(__name__)


class Scanner:
    """Produce tokens one at a time from a single immutable source string.

    ``next_token`` returns a Token, the EOF token once the input is exhausted,
    or a LexError value. Scanning stops at the first error: the scanner keeps
    returning that error until ``resync`` is called, which resumes right after
    the offending text.
    """

    def __init__(self, source: str, filename: str = "input.asl") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._error: LexError | None = None
        self._handlers: dict[CharClass, Callable[[Position], Token | LexError]] = {
            CharClass.SINGLE: self._lex_single,
            CharClass.SLASH: self._lex_slash,
            CharClass.COMPARISON: self._lex_comparison,
            CharClass.LETTER: self._lex_word,
            CharClass.DIGIT: self._lex_number,
            CharClass.QUOTE: self._lex_char,
            CharClass.DQUOTE: self._lex_string,
            CharClass.SPACE: self._lex_ws,
        }

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def error(self) -> LexError | None:
        """The error the scanner is halted on, if any."""
        return self._error

    def next_token(self) -> Token | LexError:
        """Scan and return the next token (or error) from the cursor."""
        if self._error is not None:
            return self._error

        start = self._current_pos()
        if self._pos >= len(self._source):
            return Token(TokenType.EOF, "", "", Span(start, start))

        ch = self._peek()
        kind = classify(ch)
        if kind is None:
            self._advance()
            result: Token | LexError = self._fail(
                UnexpectedCharacter, "unexpected character", start
            )
        else:
            result = self._handlers[kind](start)

        if isinstance(result, LexError):
            self._error = result
        return result

    def resync(self) -> None:
        """Clear the pending error and resume scanning after the offending text."""
        if self._error is None:
            return
        log.debug(
            "%s: resuming at %d:%d after %s",
            self._filename,
            self._line,
            self._col,
            self._error.kind,
        )
        self._error = None

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(
        self,
        tt: TokenType,
        start: Position,
        value: str | None = None,
        channel: Channel = Channel.DEFAULT,
    ) -> Token:
        raw = self._source[start.offset : self._pos]
        if value is None:
            value = raw
        return Token(tt, value, raw, Span(start, self._current_pos()), channel)

    def _fail(
        self, cls: type[LexError], message: str, pos: Position, text: str | None = None
    ) -> LexError:
        """Build an error whose offending text runs from pos to the cursor by default."""
        if text is None:
            text = self._source[pos.offset : self._pos]
        return cls(message, pos, self._source, text, self._filename)

    # ------------------------------------------------------------------
    # Punctuation and operators
    # ------------------------------------------------------------------

    def _lex_single(self, start: Position) -> Token:
        ch = self._advance()
        return self._emit(SINGLE_CHAR_TOKENS[ch], start)

    def _lex_comparison(self, start: Position) -> Token | LexError:
        ch = self._advance()
        alone, with_equals = COMPARISONS[ch]
        if self._peek() == "=":
            self._advance()
            return self._emit(with_equals, start)
        if alone is None:
            return self._fail(UnexpectedCharacter, f"'{ch}' must be followed by '='", start)
        return self._emit(alone, start)

    def _lex_slash(self, start: Position) -> Token:
        self._advance()
        if self._peek() != "/":
            return self._emit(TokenType.DIV, start)
        # Line comment; the terminator belongs to the following WS token
        while self._pos < len(self._source) and self._peek() not in LINE_ENDS:
            self._advance()
        return self._emit(TokenType.COMMENT, start, channel=Channel.HIDDEN)

    # ------------------------------------------------------------------
    # Words and numbers
    # ------------------------------------------------------------------

    def _lex_word(self, start: Position) -> Token:
        while is_ident_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]
        return self._emit(KEYWORDS.get(text, TokenType.ID), start)

    def _lex_number(self, start: Position) -> Token | LexError:
        while self._peek() in DIGITS:
            self._advance()
        if self._peek() != ".":
            return self._emit(TokenType.INTVAL, start)

        self._advance()  # consume "."
        fraction = self._peek()
        if fraction not in DIGITS:
            return self._fail(
                MalformedFloatLiteral, "expected digits after '.' in float literal", start
            )
        while self._peek() in DIGITS:
            self._advance()
        return self._emit(TokenType.FLOATVAL, start)

    # ------------------------------------------------------------------
    # Character and string literals
    # ------------------------------------------------------------------

    def _lex_char(self, start: Position) -> Token | LexError:
        self._advance()  # opening quote
        ch = self._peek()

        if not ch:
            return self._fail(UnterminatedCharLiteral, "unterminated character literal", start)

        if ch == "'":
            self._advance()
            return self._fail(UnterminatedCharLiteral, "empty character literal", start)

        if ch == "\\":
            esc_start = self._current_pos()
            self._advance()
            code = self._peek()
            if not code:
                return self._fail(
                    UnterminatedCharLiteral, "unterminated character literal", start
                )
            self._advance()
            if code not in ESCAPE_CHARS:
                return self._fail(
                    InvalidEscapeSequence, f"invalid escape sequence '\\{code}'", esc_start
                )
        else:
            self._advance()

        if self._peek() != "'":
            return self._fail(
                UnterminatedCharLiteral,
                "expected closing quote after character literal payload",
                start,
            )
        self._advance()
        raw = self._source[start.offset : self._pos]
        return self._emit(TokenType.CHARVAL, start, raw[1:-1])

    def _lex_string(self, start: Position) -> Token | LexError:
        self._advance()  # opening quote
        bad_escape: LexError | None = None

        while True:
            ch = self._peek()
            if not ch or ch in LINE_ENDS:
                if bad_escape is not None:
                    return bad_escape
                return self._fail(UnterminatedStringLiteral, "unterminated string literal", start)

            if ch == '"':
                self._advance()
                break

            if ch == "\\":
                esc_start = self._current_pos()
                self._advance()
                code = self._peek()
                if not code or code in LINE_ENDS:
                    continue
                self._advance()
                if code not in ESCAPE_CHARS and bad_escape is None:
                    # Keep scanning so the cursor ends up past the literal
                    bad_escape = self._fail(
                        InvalidEscapeSequence, f"invalid escape sequence '\\{code}'", esc_start
                    )
                continue

            self._advance()

        if bad_escape is not None:
            return bad_escape
        raw = self._source[start.offset : self._pos]
        return self._emit(TokenType.STRINGVAL, start, raw[1:-1])

    # ------------------------------------------------------------------
    # Whitespace
    # ------------------------------------------------------------------

    def _lex_ws(self, start: Position) -> Token:
        while self._pos < len(self._source) and self._peek() in WHITESPACE:
            self._advance()
        return self._emit(TokenType.WS, start, channel=Channel.HIDDEN)


def tokenize(source: str, filename: str = "input.asl", *, hidden: bool = True) -> list[Token]:
    """Convenience function: tokenize source text and return the token list.

    Raises the first LexError. Hidden-channel tokens are dropped when
    ``hidden`` is False.
    """
    scanner = Scanner(source, filename)
    tokens: list[Token] = []
    while True:
        result = scanner.next_token()
        if isinstance(result, LexError):
            raise result
        if hidden or not result.hidden:
            tokens.append(result)
        if result.type == TokenType.EOF:
            return tokens


def scan_all(source: str, filename: str = "input.asl") -> tuple[list[Token], list[LexError]]:
    """Scan the whole source, resynchronizing after each error.

    Returns every token scanned (hidden ones included) and every error met,
    both in source order.
    """
    scanner = Scanner(source, filename)
    tokens: list[Token] = []
    errors: list[LexError] = []
    while True:
        result = scanner.next_token()
        if isinstance(result, LexError):
            errors.append(result)
            scanner.resync()
            continue
        tokens.append(result)
        if result.type == TokenType.EOF:
            return tokens, errors
