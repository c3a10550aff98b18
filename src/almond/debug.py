"""--debug token table dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from almond.tokens import Token


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one row per token: line, category name, lexeme, and literal."""
    width = max((len(t.type.name) for t in tokens), default=0)
    file.write(f"{len(tokens)} tokens\n")
    for tok in tokens:
        row = f"{tok.line:>4}  {tok.type.name:<{width}}  {tok.lexeme!r}"
        if tok.literal is not None:
            row += f"  {tok.literal!r}"
        file.write(row.rstrip() + "\n")
