"""Escape decoding and literal value conversion for later stages."""

from __future__ import annotations

from types import MappingProxyType

from asllex.tokens import Token, TokenType

ESCAPES: MappingProxyType[str, str] = MappingProxyType(
    {
        "n": "\n",
        "t": "\t",
        "\\": "\\",
        "'": "'",
        '"': '"',
        "r": "\r",
        "f": "\f",
        "b": "\b",
    }
)


def unescape(text: str) -> str:
    """Decode the escape sequences in a character or string literal body.

    The scanner keeps escapes verbatim in ``Token.value``; this resolves them.
    Raises ValueError on an unknown escape or a trailing backslash.
    """
    if "\\" not in text:
        return text

    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= len(text):
            raise ValueError("trailing backslash in literal")
        code = text[i + 1]
        if code not in ESCAPES:
            raise ValueError(f"invalid escape sequence '\\{code}'")
        out.append(ESCAPES[code])
        i += 2
    return "".join(out)


def literal_value(token: Token) -> int | float | bool | str:
    """Return the Python value of a literal token."""
    if token.type == TokenType.INTVAL:
        return int(token.value)
    if token.type == TokenType.FLOATVAL:
        return float(token.value)
    if token.type == TokenType.BOOLVAL:
        return token.value == "true"
    if token.type in (TokenType.CHARVAL, TokenType.STRINGVAL):
        return unescape(token.value)
    raise ValueError(f"{token.type.name} is not a literal token")
