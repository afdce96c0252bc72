"""Token types, data structures, and character classification tables."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType


class TokenType(Enum):
    # Punctuation (single-character)
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COLON = auto()  # :
    COMMA = auto()  # ,
    LBRACK = auto()  # [
    RBRACK = auto()  # ]
    SEMI = auto()  # ;

    # Operators
    ASSIGN = auto()  # =
    ADD = auto()  # +
    SUB = auto()  # -
    MUL = auto()  # *
    DIV = auto()  # /
    MOD = auto()  # %
    EQ = auto()  # ==
    NEQ = auto()  # !=
    GT = auto()  # >
    GE = auto()  # >=
    LE = auto()  # <=
    LT = auto()  # <

    # Reserved words
    OF = auto()
    AND = auto()
    NOT = auto()
    OR = auto()
    VAR = auto()
    INT = auto()
    BOOL = auto()
    FLOAT = auto()
    CHAR = auto()
    ARRAY = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    ENDIF = auto()
    WHILE = auto()
    DO = auto()
    ENDWHILE = auto()
    FUNC = auto()
    ENDFUNC = auto()
    RETURN = auto()
    READ = auto()
    WRITE = auto()

    # Literals and names
    INTVAL = auto()  # digits
    BOOLVAL = auto()  # true | false
    FLOATVAL = auto()  # digits.digits
    CHARVAL = auto()  # 'c', value is the body with escapes kept verbatim
    STRINGVAL = auto()  # "...", value is the body with escapes kept verbatim
    ID = auto()  # letter (letter | digit)*

    # Hidden channel
    COMMENT = auto()  # // to end of line, terminator excluded
    WS = auto()  # run of space, tab, CR, LF

    EOF = auto()


class Channel(Enum):
    DEFAULT = 0
    HIDDEN = 1


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single token: its kind, payload, exact source text and location.

    ``raw`` is always the matched lexeme, so joining ``raw`` over a full token
    list gives back the source. ``value`` is what the parser reads: the
    spelling for keywords and operators, the name for identifiers, and the
    literal body without delimiters for character and string literals.
    """

    type: TokenType
    value: str
    raw: str
    span: Span
    channel: Channel = Channel.DEFAULT

    @property
    def position(self) -> Position:
        return self.span.start

    @property
    def hidden(self) -> bool:
        return self.channel is Channel.HIDDEN


KEYWORDS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "of": TokenType.OF,
        "and": TokenType.AND,
        "not": TokenType.NOT,
        "or": TokenType.OR,
        "var": TokenType.VAR,
        "int": TokenType.INT,
        "bool": TokenType.BOOL,
        "float": TokenType.FLOAT,
        "char": TokenType.CHAR,
        "array": TokenType.ARRAY,
        "if": TokenType.IF,
        "then": TokenType.THEN,
        "else": TokenType.ELSE,
        "endif": TokenType.ENDIF,
        "while": TokenType.WHILE,
        "do": TokenType.DO,
        "endwhile": TokenType.ENDWHILE,
        "func": TokenType.FUNC,
        "endfunc": TokenType.ENDFUNC,
        "return": TokenType.RETURN,
        "read": TokenType.READ,
        "write": TokenType.WRITE,
        "true": TokenType.BOOLVAL,
        "false": TokenType.BOOLVAL,
    }
)

SINGLE_CHAR_TOKENS: MappingProxyType[str, TokenType] = MappingProxyType(
    {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
        "[": TokenType.LBRACK,
        "]": TokenType.RBRACK,
        ";": TokenType.SEMI,
        "+": TokenType.ADD,
        "-": TokenType.SUB,
        "*": TokenType.MUL,
        "%": TokenType.MOD,
    }
)

# Lead character -> (token alone, token when followed by "=").
# "!" has no one-character form.
COMPARISONS: MappingProxyType[str, tuple[TokenType | None, TokenType]] = MappingProxyType(
    {
        "=": (TokenType.ASSIGN, TokenType.EQ),
        "!": (None, TokenType.NEQ),
        ">": (TokenType.GT, TokenType.GE),
        "<": (TokenType.LT, TokenType.LE),
    }
)

# Characters allowed after a backslash in character and string literals.
ESCAPE_CHARS = frozenset("nt\\'\"rfb")

LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
WHITESPACE = frozenset(" \t\r\n")
LINE_ENDS = frozenset("\r\n")


class CharClass(Enum):
    """Category of the character that starts a token."""

    SINGLE = auto()
    SLASH = auto()
    COMPARISON = auto()
    LETTER = auto()
    DIGIT = auto()
    QUOTE = auto()
    DQUOTE = auto()
    SPACE = auto()


def _build_char_classes() -> MappingProxyType[str, CharClass]:
    table: dict[str, CharClass] = {}
    for ch in SINGLE_CHAR_TOKENS:
        table[ch] = CharClass.SINGLE
    for ch in COMPARISONS:
        table[ch] = CharClass.COMPARISON
    for ch in LETTERS:
        table[ch] = CharClass.LETTER
    for ch in DIGITS:
        table[ch] = CharClass.DIGIT
    for ch in WHITESPACE:
        table[ch] = CharClass.SPACE
    table["/"] = CharClass.SLASH
    table["'"] = CharClass.QUOTE
    table['"'] = CharClass.DQUOTE
    return MappingProxyType(table)


CHAR_CLASSES = _build_char_classes()


def classify(ch: str) -> CharClass | None:
    """Return the token-start class of ch, or None if no token starts with it."""
    return CHAR_CLASSES.get(ch)


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return ch in LETTERS or ch in DIGITS
