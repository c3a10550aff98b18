"""Command-line interface for Almond."""

from __future__ import annotations

import argparse
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from almond.errors import Reporter
from almond.tokens import Token

# sysexits.h
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66

USAGE = "Usage: almond [options] [script]"
FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    script: Path | None
    output_format: str
    prompt: str
    snippets: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="almond",
        description="Almond scanner: print the tokens of a script or of each prompt line",
    )
    p.add_argument(
        "script",
        nargs="*",
        help="Script file to scan (default: read lines from stdin)",
    )
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    p.add_argument("--prompt", default=None, metavar="TEXT", help='Prompt string (default: "> ")')
    p.add_argument(
        "--snippets",
        action="store_true",
        default=None,
        help="Show source snippets for diagnostics in file mode",
    )
    p.add_argument("--debug", action="store_true", help="Dump a token table to stderr")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover almond.toml)",
    )
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "almond.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags. Expects at most one script.
    """
    script = Path(args.script[0]) if args.script else None
    search_dir = Path(".")
    if script is not None and script.parent.parts:
        search_dir = script.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    output_format = "text"
    snippets = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config: {cfg_format!r} "
                    f"(expected one of {', '.join(FORMATS)})"
                )
            output_format = cfg_format
        cfg_snippets = cfg_output.get("snippets")
        if isinstance(cfg_snippets, bool):
            snippets = cfg_snippets
    if args.format is not None:
        output_format = args.format
    if args.snippets is not None:
        snippets = args.snippets

    prompt = "> "
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt
    if args.prompt is not None:
        prompt = args.prompt

    return CliOptions(
        script=script,
        output_format=output_format,
        prompt=prompt,
        snippets=snippets,
        debug=args.debug,
    )


def print_tokens(tokens: list[Token], output_format: str) -> None:
    """Write tokens to stdout, one per line as text or as a single JSON array."""
    if output_format == "json":
        sys.stdout.write(json.dumps([t.to_dict() for t in tokens], allow_nan=False) + "\n")
        return
    for tok in tokens:
        sys.stdout.write(f"{tok}\n")


def run(source: str, options: CliOptions, reporter: Reporter) -> list[Token]:
    """Scan one source unit and print its tokens."""
    from almond.debug import dump_tokens
    from almond.lexer import tokenize

    tokens = tokenize(source, reporter)
    if options.debug:
        dump_tokens(tokens)
    print_tokens(tokens, options.output_format)
    return tokens


def run_file(options: CliOptions) -> int:
    """Scan a whole file once. Returns 65 if any diagnostic was reported."""
    assert options.script is not None
    try:
        source = options.script.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.script}: {exc}", file=sys.stderr)
        return EX_NOINPUT

    # With snippets on, the rendered snippet replaces the one-line report
    reporter = Reporter(stream=None) if options.snippets else Reporter()
    run(source, options, reporter)

    if options.snippets:
        for diag in reporter.diagnostics:
            print(diag.render(source, str(options.script)), file=sys.stderr)

    return EX_DATAERR if reporter.had_error else 0


def run_prompt(options: CliOptions) -> int:
    """Scan stdin one line at a time until EOF or an empty line."""
    while True:
        sys.stdout.write(options.prompt)
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line.strip():
            break
        run(line.rstrip("\n"), options, Reporter())
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/2/64/65/66). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print(USAGE, file=sys.stderr)
        return EX_USAGE

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.script is None:
        return run_prompt(options)
    return run_file(options)
