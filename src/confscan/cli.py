"""Command-line interface for confscan."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from confscan.debug import dump_tokens, dump_tokens_json
from confscan.errors import ScanError
from confscan.scanner import Scanner
from confscan.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

FORMATS = ("text", "json")
CONFIG_NAME = "confscan.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    format: str
    skip_whitespace: bool
    skip_comments: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="confscan",
        description="Scan a config file and print its tokens",
    )
    p.add_argument("input", help="Input file, or - for stdin")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    p.add_argument(
        "--skip-whitespace",
        action="store_true",
        default=None,
        help="Omit White Space tokens from the output",
    )
    p.add_argument(
        "--skip-comments",
        action="store_true",
        default=None,
        help="Omit Comment tokens from the output",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Log scanner activity to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        logger.debug("no config file at %s", path)
        return {}

    logger.debug("loading config from %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_bool(table: dict[str, Any], key: str) -> bool:
    value = table.get(key, False)
    if not isinstance(value, bool):
        raise argparse.ArgumentTypeError(f"config value output.{key} must be a boolean")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    output = config.get("output", {})
    if not isinstance(output, dict):
        raise argparse.ArgumentTypeError("config value output must be a table")

    fmt = output.get("format", "text")
    if fmt not in FORMATS:
        raise argparse.ArgumentTypeError(
            f"config value output.format must be one of {', '.join(FORMATS)}: {fmt!r}"
        )
    if args.format is not None:
        fmt = args.format

    skip_whitespace = _config_bool(output, "skip_whitespace")
    if args.skip_whitespace is not None:
        skip_whitespace = args.skip_whitespace

    skip_comments = _config_bool(output, "skip_comments")
    if args.skip_comments is not None:
        skip_comments = args.skip_comments

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        skip_whitespace=skip_whitespace,
        skip_comments=skip_comments,
        debug=args.debug,
    )


def scan_input(options: CliOptions) -> tuple[list[Token], str]:
    """Scan the input and return (tokens, source text)."""
    if options.input_file is None:
        scanner = Scanner(sys.stdin)
        return list(scanner), scanner.text

    with open(options.input_file, encoding="utf-8") as f:
        scanner = Scanner(f)
        return list(scanner), scanner.text


def select_tokens(tokens: list[Token], options: CliOptions) -> list[Token]:
    """Drop the token kinds the options ask to skip."""
    skipped: set[TokenKind] = set()
    if options.skip_whitespace:
        skipped.add(TokenKind.WHITESPACE)
    if options.skip_comments:
        skipped.add(TokenKind.COMMENT)
    return [t for t in tokens if t.kind not in skipped]


def write_tokens(tokens: list[Token], options: CliOptions) -> None:
    if options.output_file:
        with open(options.output_file, "w", encoding="utf-8") as f:
            _write(tokens, options.format, f)
    else:
        _write(tokens, options.format, sys.stdout)


def _write(tokens: list[Token], fmt: str, file: Any) -> None:
    if fmt == "json":
        dump_tokens_json(tokens, file=file)
    else:
        dump_tokens(tokens, file=file)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except (
        argparse.ArgumentTypeError,
        tomllib.TOMLDecodeError,
        UnicodeDecodeError,
        OSError,
    ) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        tokens, source = scan_input(options)
    except (ScanError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        write_tokens(select_tokens(tokens, options), options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    invalid = [t for t in tokens if t.kind is TokenKind.INVALID]
    for token in invalid:
        if token.error is not None:
            print(token.error.format(source, filename), file=sys.stderr)

    return 1 if invalid else 0
