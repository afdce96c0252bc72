"""ASL lexical analyzer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from asllex.tokens import Token

__version__ = "0.1.0"


def lex(source: str, filename: str = "input.asl") -> list[Token]:
    """Tokenize ASL source and return the parser-visible tokens, ending with EOF."""
    from asllex.scanner import tokenize

    return tokenize(source, filename, hidden=False)
