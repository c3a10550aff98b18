"""Reserved words of the Almond language."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from almond.tokens import TokenType

# Exact, case-sensitive text. Every reserved word is lowercase.
KEYWORDS: Mapping[str, TokenType] = MappingProxyType(
    {
        "and": TokenType.AND,
        "or": TokenType.OR,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "while": TokenType.WHILE,
        "for": TokenType.FOR,
        "class": TokenType.CLASS,
        "var": TokenType.VAR,
        "fun": TokenType.FUN,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "this": TokenType.THIS,
        "print": TokenType.PRINT,
        "return": TokenType.RETURN,
        "super": TokenType.SUPER,
        "nil": TokenType.NIL,
    }
)

# Keywords that scan as BOOLEAN tokens, with their literal value.
BOOLEAN_KEYWORDS: Mapping[TokenType, bool] = MappingProxyType(
    {TokenType.TRUE: True, TokenType.FALSE: False}
)


def lookup(text: str) -> TokenType | None:
    """Return the keyword category for text, or None if it is not reserved."""
    return KEYWORDS.get(text)
