"""Token listing for the command line, as text lines or JSON."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import Any, TextIO

from asllex.tokens import Token, TokenType


def format_token(index: int, tok: Token) -> str:
    """Render one token in ANTLR's ``-tokens`` layout.

    Offsets are inclusive and columns 0-based, matching that tool:
    ``[@0,0:2='var',<VAR>,1:0]``.
    """
    start = tok.span.start.offset
    stop = tok.span.end.offset - 1
    raw = tok.raw if tok.type != TokenType.EOF else "<EOF>"
    text = raw.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    channel = f",channel={tok.channel.value}" if tok.hidden else ""
    return (
        f"[@{index},{start}:{stop}='{text}',<{tok.type.name}>{channel},"
        f"{tok.span.start.line}:{tok.span.start.column - 1}]"
    )


def token_to_dict(tok: Token) -> dict[str, Any]:
    return {
        "type": tok.type.name,
        "value": tok.value,
        "raw": tok.raw,
        "channel": tok.channel.name,
        "line": tok.span.start.line,
        "column": tok.span.start.column,
        "offset": tok.span.start.offset,
    }


def dump_tokens(tokens: Iterable[Token], *, fmt: str = "text", file: TextIO = sys.stdout) -> None:
    """Write a token listing to *file*."""
    if fmt == "json":
        json.dump([token_to_dict(t) for t in tokens], file, indent=2)
        file.write("\n")
        return
    for i, tok in enumerate(tokens):
        file.write(format_token(i, tok) + "\n")
