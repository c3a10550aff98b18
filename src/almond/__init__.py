"""Almond scripting language scanner."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from almond.errors import Reporter
    from almond.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str, reporter: Reporter | None = None) -> list[Token]:
    """Scan Almond source text into tokens, ending with the EOF sentinel."""
    from almond.lexer import tokenize as _tokenize

    return _tokenize(source, reporter)
