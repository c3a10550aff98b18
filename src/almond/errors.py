"""Diagnostic records and the reporter that collects them."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TextIO

from almond.tokens import Span, Token, TokenType

UNEXPECTED_CHARACTER = "Unexpected character."
UNTERMINATED_STRING = "Unterminated string."


class DiagnosticKind(Enum):
    UNEXPECTED_CHARACTER = auto()
    UNTERMINATED_STRING = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A reported, non-fatal problem in the source text."""

    line: int
    message: str
    where: str = ""
    kind: DiagnosticKind | None = None
    span: Span | None = None

    def format(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def render(self, source: str, filename: str = "<input>") -> str:
        """Format with a source snippet and caret underline.

        Falls back to the one-line form when the diagnostic has no span.
        """
        if self.span is None:
            return self.format()

        lines = source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


@dataclass
class Reporter:
    """Collects diagnostics for one or more scans and tracks the error flag.

    Each report is written to ``stream`` as soon as it is made. A reporter
    with ``stream=None`` records silently.
    """

    stream: TextIO | None = field(default_factory=lambda: sys.stderr)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    def report(
        self,
        line: int,
        where: str,
        message: str,
        *,
        kind: DiagnosticKind | None = None,
        span: Span | None = None,
    ) -> Diagnostic:
        diag = Diagnostic(line, message, where, kind, span)
        self.diagnostics.append(diag)
        if self.stream is not None:
            print(diag.format(), file=self.stream, flush=True)
        return diag

    def error(
        self,
        line: int,
        message: str,
        *,
        kind: DiagnosticKind | None = None,
        span: Span | None = None,
    ) -> Diagnostic:
        """Report without location context."""
        return self.report(line, "", message, kind=kind, span=span)

    def token_error(self, token: Token, message: str) -> Diagnostic:
        """Report anchored at a token; the EOF sentinel reads as 'at end'."""
        if token.type == TokenType.EOF:
            return self.report(token.line, " at end", message)
        return self.report(token.line, f" at '{token.lexeme}'", message)

    def reset(self) -> None:
        self.diagnostics.clear()
