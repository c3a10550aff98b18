"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from collections.abc import Mapping
import math
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Any


class TokenType(Enum):
    # Single-character punctuation
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACE = auto()  # {
    RIGHT_BRACE = auto()  # }
    COMMA = auto()  # ,
    DOT = auto()  # .
    MINUS = auto()  # -
    PLUS = auto()  # +
    SLASH = auto()  # /
    STAR = auto()  # *
    SEMICOLON = auto()  # ;

    # One or two character operators
    BANG = auto()  # !
    BANG_EQUAL = auto()  # !=
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    GREATER = auto()  # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=

    # Literals
    IDENTIFIER = auto()
    STRING = auto()  # literal is the text between the quotes
    NUMBER = auto()  # literal is a float
    BOOLEAN = auto()  # literal is a bool

    # Keywords
    AND = auto()
    OR = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    CLASS = auto()
    VAR = auto()
    FUN = auto()
    TRUE = auto()
    FALSE = auto()
    THIS = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    NIL = auto()

    EOF = auto()


DISPLAY_NAMES: Mapping[TokenType, str] = MappingProxyType(
    {
        TokenType.LEFT_PAREN: "Left Parenthesis",
        TokenType.RIGHT_PAREN: "Right Parenthesis",
        TokenType.LEFT_BRACE: "Left Brace",
        TokenType.RIGHT_BRACE: "Right Brace",
        TokenType.COMMA: "Comma",
        TokenType.DOT: "Dot",
        TokenType.MINUS: "Minus",
        TokenType.PLUS: "Plus",
        TokenType.SLASH: "Slash",
        TokenType.STAR: "Star",
        TokenType.SEMICOLON: "Semicolon",
        TokenType.BANG: "Bang",
        TokenType.BANG_EQUAL: "Bang Equals",
        TokenType.EQUAL: "Equal",
        TokenType.EQUAL_EQUAL: "Equal Equal",
        TokenType.GREATER: "Greater",
        TokenType.GREATER_EQUAL: "Greater Equals",
        TokenType.LESS: "Less",
        TokenType.LESS_EQUAL: "Less Equals",
        TokenType.IDENTIFIER: "Identifier",
        TokenType.STRING: "String",
        TokenType.NUMBER: "Number",
        TokenType.BOOLEAN: "Boolean",
        TokenType.AND: "And",
        TokenType.OR: "Or",
        TokenType.IF: "If",
        TokenType.ELSE: "Else",
        TokenType.WHILE: "While",
        TokenType.FOR: "For",
        TokenType.CLASS: "Class",
        TokenType.VAR: "Var",
        TokenType.FUN: "Fun",
        TokenType.TRUE: "True",
        TokenType.FALSE: "False",
        TokenType.THIS: "This",
        TokenType.PRINT: "Print",
        TokenType.RETURN: "Return",
        TokenType.SUPER: "Super",
        TokenType.NIL: "Nil",
        TokenType.EOF: "End",
    }
)


# Literal value carried by a token: exactly one of bool, float, str, or None.
Literal = bool | float | str | None

# Which literal variant each literal-bearing category must carry.
_LITERAL_KINDS: Mapping[TokenType, type] = MappingProxyType(
    {
        TokenType.NUMBER: float,
        TokenType.STRING: str,
        TokenType.BOOLEAN: bool,
    }
)


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
    """A single scanned token: category, exact source text, literal, and line."""

    type: TokenType
    lexeme: str
    literal: Literal
    line: int

    def __post_init__(self) -> None:
        kind = _LITERAL_KINDS.get(self.type)
        if kind is None:
            if self.literal is not None:
                raise ValueError(f"{self.type.name} token cannot carry a literal")
        # bool is a subclass of int, never of float, so type() keeps variants apart
        elif type(self.literal) is not kind:
            raise ValueError(
                f"{self.type.name} token requires a {kind.__name__} literal, "
                f"got {self.literal!r}"
            )

    def __str__(self) -> str:
        return f"{DISPLAY_NAMES[self.type]}: {self.lexeme} {literal_text(self.literal)}"

    def to_dict(self) -> dict[str, Any]:
        literal = self.literal
        # JSON has no infinity; an overflowing number keeps its source text
        if isinstance(literal, float) and not math.isfinite(literal):
            literal = self.lexeme
        return {
            "type": self.type.name,
            "lexeme": self.lexeme,
            "literal": literal,
            "line": self.line,
        }


def literal_text(literal: Literal) -> str:
    """Render a literal value for display; empty for the none variant."""
    if literal is None:
        return ""
    if isinstance(literal, bool):
        return "true" if literal else "false"
    return str(literal)


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return len(ch) == 1 and "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    """Return True if ch is an ASCII letter."""
    return len(ch) == 1 and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def is_alnum(ch: str) -> bool:
    """Return True if ch is an ASCII letter or digit."""
    return is_alpha(ch) or is_digit(ch)
