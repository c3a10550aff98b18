"""Almond lexer: converts source text into a flat token stream."""

from __future__ import annotations

from dataclasses import dataclass

from almond.errors import (
    UNEXPECTED_CHARACTER,
    UNTERMINATED_STRING,
    Diagnostic,
    DiagnosticKind,
    Reporter,
)
from almond.keywords import BOOLEAN_KEYWORDS, lookup
from almond.tokens import Literal, Position, Span, Token, TokenType, is_alnum, is_alpha, is_digit

# Characters that always form a complete token on their own.
_SINGLE: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Operators that become a two-character token when followed by '='.
_WITH_EQUAL: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

_WHITESPACE = frozenset(" \r\t")


class Scanner:
    """Tokenize Almond source text into a list of Token objects.

    Malformed input never raises: it is reported to ``reporter`` and the
    scan carries on from the next unconsumed character.
    """

    def __init__(self, source: str, reporter: Reporter | None = None) -> None:
        self._source = source
        self.reporter = reporter if reporter is not None else Reporter(stream=None)
        self._start = 0
        self._current = 0
        self._line = 1
        self._line_start = 0  # offset of the first character on the current line
        self._start_pos = Position(1, 1, 0)
        self._tokens: list[Token] = []
        self._done = False

    def scan_tokens(self) -> list[Token]:
        """Scan the full source and return the token list, ending with EOF."""
        if self._done:
            return self._tokens

        while not self._at_end():
            self._start = self._current
            self._start_pos = self._current_pos()
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", None, self._line))
        self._done = True
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _current_pos(self) -> Position:
        return Position(self._line, self._current - self._line_start + 1, self._current)

    def _peek(self) -> str:
        if self._at_end():
            return ""
        return self._source[self._current]

    def _peek_next(self) -> str:
        if self._current + 1 >= len(self._source):
            return ""
        return self._source[self._current + 1]

    def _advance(self) -> str:
        ch = self._source[self._current]
        self._current += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._peek() != expected:
            return False
        self._current += 1
        return True

    def _newline(self) -> None:
        # Called after the '\n' has been consumed.
        self._line += 1
        self._line_start = self._current

    def _add_token(self, tt: TokenType, literal: Literal = None) -> None:
        text = self._source[self._start : self._current]
        self._tokens.append(Token(tt, text, literal, self._start_pos.line))

    def _error(self, kind: DiagnosticKind, message: str) -> Diagnostic:
        span = Span(self._start_pos, self._current_pos())
        return self.reporter.error(self._line, message, kind=kind, span=span)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._advance()

        tt = _SINGLE.get(ch)
        if tt is not None:
            self._add_token(tt)
            return

        pair = _WITH_EQUAL.get(ch)
        if pair is not None:
            one, two = pair
            self._add_token(two if self._match("=") else one)
            return

        if ch == "/":
            if self._match("/"):
                # Comment runs to end of line; the newline itself is left for the loop
                while self._peek() != "\n" and not self._at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
            return

        if ch in _WHITESPACE:
            return

        if ch == "\n":
            self._newline()
            return

        if ch == '"':
            self._string()
            return

        if is_digit(ch):
            self._number()
            return

        if is_alpha(ch):
            self._identifier()
            return

        self._error(DiagnosticKind.UNEXPECTED_CHARACTER, UNEXPECTED_CHARACTER)

    # ------------------------------------------------------------------
    # Sub-scanners
    # ------------------------------------------------------------------

    def _string(self) -> None:
        while self._peek() != '"' and not self._at_end():
            if self._advance() == "\n":
                self._newline()

        if self._at_end():
            # The malformed text is dropped: no token is emitted for it.
            self._error(DiagnosticKind.UNTERMINATED_STRING, UNTERMINATED_STRING)
            return

        self._advance()  # closing quote
        value = self._source[self._start + 1 : self._current - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self) -> None:
        while is_digit(self._peek()):
            self._advance()

        # A fractional part needs at least one digit after the '.'
        if self._peek() == "." and is_digit(self._peek_next()):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self._source[self._start : self._current]))

    def _identifier(self) -> None:
        while is_alnum(self._peek()):
            self._advance()

        text = self._source[self._start : self._current]
        tt = lookup(text)
        if tt is None:
            self._add_token(TokenType.IDENTIFIER)
        elif tt in BOOLEAN_KEYWORDS:
            self._add_token(TokenType.BOOLEAN, BOOLEAN_KEYWORDS[tt])
        else:
            self._add_token(tt)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Tokens from one scan together with the diagnostics it reported."""

    tokens: list[Token]
    diagnostics: list[Diagnostic]

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)


def tokenize(source: str, reporter: Reporter | None = None) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Scanner(source, reporter).scan_tokens()


def scan(source: str) -> ScanResult:
    """Tokenize source with a private, silent reporter and return both results."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return ScanResult(tokens, list(scanner.reporter.diagnostics))
