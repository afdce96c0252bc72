"""Parser handoff: channel filtering and a cursor over visible tokens."""

from __future__ import annotations

from collections.abc import Iterable

from asllex.errors import ParseError
from asllex.scanner import tokenize
from asllex.tokens import Token, TokenType


def visible(tokens: Iterable[Token]) -> list[Token]:
    """Return the default-channel tokens, in order (EOF included)."""
    return [t for t in tokens if not t.hidden]


class TokenStream:
    """Read-only cursor over the default-channel tokens of one source."""

    def __init__(self, tokens: Iterable[Token], source: str, filename: str = "input.asl") -> None:
        self._tokens = visible(tokens)
        if not self._tokens or self._tokens[-1].type != TokenType.EOF:
            raise ValueError("token stream must end with EOF")
        self._source = source
        self._filename = filename
        self._pos = 0

    @classmethod
    def from_source(cls, source: str, filename: str = "input.asl") -> TokenStream:
        """Tokenize source and wrap the visible tokens. Raises the first LexError."""
        return cls(tokenize(source, filename, hidden=False), source, filename)

    def __len__(self) -> int:
        return len(self._tokens)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return self._tokens[-1]  # EOF

    def at(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def at_eof(self) -> bool:
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def expect(self, tt: TokenType, message: str) -> Token:
        tok = self.peek()
        if tok.type != tt:
            raise ParseError(message, tok.span, self._source, self._filename)
        return self.advance()
