"""Error types with formatted source context."""

from __future__ import annotations

from asllex.tokens import Position, Span


def _snippet(
    message: str, source: str, line: int, col: int, width: int, filename: str
) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = line - 1

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # At least one caret, but stay within the line
    underline_len = max(1, min(width, len(source_line) - col + 1))

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


def _quote(text: str) -> str:
    """Show control and other non-printable characters as escapes, everything else as is."""
    out: list[str] = []
    for ch in text:
        if ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif not ch.isprintable():
            out.append(f"\\x{ord(ch):02x}" if ord(ch) < 0x100 else f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


class LexError(Exception):
    """A lexical error at a source position.

    The scanner hands these back as values from ``Scanner.next_token``;
    ``tokenize`` raises the first one. ``text`` is the offending source text
    (a single character, or the literal scanned so far).
    """

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        text: str = "",
        filename: str = "input.asl",
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.text = text
        self.filename = filename
        super().__init__(self.format())

    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        """One-line report: ``line L, column C: <message>, found '<text>'``."""
        found = _quote(self.text)
        return (
            f"line {self.position.line}, column {self.position.column}: "
            f"{self.message}, found '{found}'"
        )

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        return _snippet(
            self.message,
            self.source,
            self.position.line,
            self.position.column,
            len(self.text),
            filename,
        )


class UnterminatedCharLiteral(LexError):
    pass


class UnterminatedStringLiteral(LexError):
    pass


class InvalidEscapeSequence(LexError):
    pass


class MalformedFloatLiteral(LexError):
    pass


class UnexpectedCharacter(LexError):
    pass


class ParseError(Exception):
    """Raised by token stream consumers on an unexpected token."""

    def __init__(
        self, message: str, span: Span, source: str, filename: str = "input.asl"
    ) -> None:
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        start, end = self.span.start, self.span.end
        # Underline the full span when on one line, otherwise to end of line
        if end.line == start.line:
            width = max(1, end.column - start.column)
        else:
            width = len(self.source)
        return _snippet(self.message, self.source, start.line, start.column, width, filename)
