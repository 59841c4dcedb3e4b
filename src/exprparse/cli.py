"""Command-line interface for exprparse."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from exprparse.config import create_parser, load_config
from exprparse.errors import ConfigError, ParseError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    expressions: list[str]
    config: dict[str, Any]
    program: bool
    tokens: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="exprparse",
        description="Parse expressions with a configurable operator grammar",
    )
    p.add_argument(
        "input",
        nargs="?",
        help="Input file, one expression per line (default: stdin)",
    )
    p.add_argument(
        "-e",
        "--expr",
        action="append",
        default=[],
        metavar="EXPR",
        help="Expression to parse instead of reading input (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Grammar config file (default: auto-discover exprparse.toml)",
    )
    p.add_argument(
        "--program",
        action="store_true",
        help="Parse the whole input as statements separated by ';' or line breaks",
    )
    p.add_argument("--tokens", action="store_true", help="Dump tokens instead of parsing")
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    The config file is --config if given, else exprparse.toml next to the
    input file (or in the current directory).
    """
    input_file = Path(args.input) if args.input and args.input != "-" else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"config file not found: {config_path}")
    config = load_config(config_path, search_dir)

    return CliOptions(
        input_file=input_file,
        expressions=list(args.expr),
        config=config,
        program=args.program,
        tokens=args.tokens,
    )


def read_sources(options: CliOptions, stdin: TextIO) -> list[tuple[str, str]]:
    """Return (filename, source) pairs to process, one per expression in line mode."""
    if options.expressions:
        return [("<expr>", expr) for expr in options.expressions]

    if options.input_file is not None:
        filename = str(options.input_file)
        text = options.input_file.read_text(encoding="utf-8")
    else:
        filename = "<stdin>"
        text = stdin.read()

    if options.program:
        return [(filename, text)]
    return [(filename, line) for line in text.splitlines() if line.strip()]


def run(options: CliOptions, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    """Parse every source, printing results to stdout and diagnostics to stderr.

    A failing expression does not stop the ones after it.
    """
    from exprparse.debug import dump_tokens
    from exprparse.statements import parse_statements

    parser = create_parser(options.config)
    failed = False

    for filename, source in read_sources(options, stdin):
        try:
            if options.tokens:
                tokenizer = parser.create_tokenizer(source)
                tokenizer.insert_semicolons = tokenizer.insert_semicolons or options.program
                dump_tokens(tokenizer.tokenize(), file=stdout)
            elif options.program:
                for result in parse_statements(parser, None, source):
                    stdout.write(result + "\n")
            else:
                stdout.write(parser.parse(None, source) + "\n")
        except ParseError as exc:
            failed = True
            stderr.write(exc.format(filename) + "\n")

    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
        return run(options, sys.stdin, sys.stdout, sys.stderr)
    except (ConfigError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
