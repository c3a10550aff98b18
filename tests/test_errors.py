"""Test diagnostics: reporting, recovery, formatting, and the reporter."""

import io

from almond.errors import Diagnostic, DiagnosticKind, Reporter
from almond.lexer import scan, tokenize
from almond.tokens import Position, Span, Token, TokenType

from .conftest import assert_types


class TestUnexpectedCharacter:
    def test_reported(self, reporter):
        tokenize("@", reporter)
        assert reporter.had_error
        diag = reporter.diagnostics[0]
        assert diag.kind == DiagnosticKind.UNEXPECTED_CHARACTER
        assert diag.message == "Unexpected character."
        assert diag.line == 1

    def test_no_token_emitted(self):
        result = scan("@")
        assert_types(result.tokens, [TokenType.EOF])

    def test_scan_recovers(self, reporter):
        tokens = tokenize("1 @ 2", reporter)
        assert_types(tokens, [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF])
        assert tokens[1].literal == 2.0

    def test_next_token_still_correct(self, reporter):
        tokens = tokenize("#var", reporter)
        assert_types(tokens, [TokenType.VAR, TokenType.EOF])

    def test_each_bad_character_reported(self, reporter):
        tokenize("@#\n$", reporter)
        assert [d.line for d in reporter.diagnostics] == [1, 1, 2]

    def test_position(self, reporter):
        tokenize("ok\n  ^", reporter)
        span = reporter.diagnostics[0].span
        assert span == Span(Position(2, 3, 5), Position(2, 4, 6))


class TestScanResult:
    def test_clean_source(self):
        result = scan("print 1;")
        assert not result.had_error
        assert result.diagnostics == []

    def test_independent_scans(self):
        bad = scan("@")
        good = scan("x")
        assert bad.had_error
        assert not good.had_error

    def test_mixed_errors(self):
        result = scan('@ "open')
        kinds = [d.kind for d in result.diagnostics]
        assert kinds == [DiagnosticKind.UNEXPECTED_CHARACTER, DiagnosticKind.UNTERMINATED_STRING]


class TestReporter:
    def test_writes_immediately(self):
        stream = io.StringIO()
        reporter = Reporter(stream=stream)
        reporter.error(3, "Unexpected character.")
        assert stream.getvalue() == "[line 3] Error: Unexpected character.\n"

    def test_silent_reporter_still_records(self):
        reporter = Reporter(stream=None)
        reporter.error(1, "boom")
        assert reporter.had_error
        assert len(reporter.diagnostics) == 1

    def test_report_with_location(self):
        stream = io.StringIO()
        reporter = Reporter(stream=stream)
        reporter.report(2, " at 'x'", "Bad thing.")
        assert stream.getvalue() == "[line 2] Error at 'x': Bad thing.\n"

    def test_token_error_at_end(self, reporter):
        diag = reporter.token_error(Token(TokenType.EOF, "", None, 4), "Expect ';'.")
        assert diag.format() == "[line 4] Error at end: Expect ';'."

    def test_token_error_at_lexeme(self, reporter):
        diag = reporter.token_error(Token(TokenType.IDENTIFIER, "foo", None, 2), "Oops.")
        assert diag.format() == "[line 2] Error at 'foo': Oops."

    def test_reset(self, reporter):
        reporter.error(1, "boom")
        reporter.reset()
        assert not reporter.had_error
        assert reporter.diagnostics == []

    def test_default_stream_is_stderr(self, capsys):
        tokenize("@", Reporter())
        captured = capsys.readouterr()
        assert captured.err == "[line 1] Error: Unexpected character.\n"
        assert captured.out == ""


class TestRender:
    def test_contains_source_line_and_carets(self):
        result = scan("x = @;")
        rendered = result.diagnostics[0].render("x = @;", "demo.al")
        assert rendered.startswith("error: Unexpected character.")
        assert "demo.al:1:5" in rendered
        assert "x = @;" in rendered
        assert rendered.endswith("    ^")

    def test_second_line(self):
        source = "x\ny @"
        result = scan(source)
        rendered = result.diagnostics[0].render(source)
        assert "<input>:2:3" in rendered
        assert "2 | y @" in rendered

    def test_without_span_falls_back(self):
        diag = Diagnostic(7, "Something.")
        assert diag.render("whatever") == "[line 7] Error: Something."

    def test_unterminated_multiline_underlines_to_end_of_line(self):
        source = 'a "bc\nde'
        result = scan(source)
        rendered = result.diagnostics[0].render(source)
        assert "1:3" in rendered
        assert rendered.endswith("  ^^^")


class TestErrorSignature:
    def test_error_passes_kind_and_span(self, reporter):
        span = Span(Position(1, 1, 0), Position(1, 2, 1))
        diag = reporter.error(
            1, "Unexpected character.", kind=DiagnosticKind.UNEXPECTED_CHARACTER, span=span
        )
        assert diag.kind == DiagnosticKind.UNEXPECTED_CHARACTER
        assert diag.span == span
        assert diag.where == ""
