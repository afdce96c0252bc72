"""Command-line interface: tokenize an ASL file and list its tokens."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from asllex.errors import LexError
from asllex.tokens import Token

log = logging.getLogger(__name__)

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    fmt: str
    hidden: bool
    keep_going: bool
    debug: bool


class ConfigError(Exception):
    """Raised on an unreadable or invalid config file."""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="asllex",
        description="ASL lexical analyzer: list the tokens of a source file",
    )
    p.add_argument("input", help="Input .asl file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token listing format (default: text)",
    )
    p.add_argument(
        "--hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include hidden-channel tokens (comments, whitespace)",
    )
    p.add_argument(
        "--keep-going",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report every lexical error instead of stopping at the first",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover asllex.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "asllex.toml"

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    fmt = "text"
    hidden = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_fmt = cfg_output.get("format")
        if isinstance(cfg_fmt, str):
            if cfg_fmt not in FORMATS:
                raise ConfigError(f"unknown output format in config: {cfg_fmt!r}")
            fmt = cfg_fmt
        cfg_hidden = cfg_output.get("hidden")
        if isinstance(cfg_hidden, bool):
            hidden = cfg_hidden

    keep_going = False
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_keep = cfg_lexer.get("keep_going")
        if isinstance(cfg_keep, bool):
            keep_going = cfg_keep

    if args.format is not None:
        fmt = args.format
    if args.hidden is not None:
        hidden = args.hidden
    if args.keep_going is not None:
        keep_going = args.keep_going

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        fmt=fmt,
        hidden=hidden,
        keep_going=keep_going,
        debug=args.debug,
    )


def lex_file(options: CliOptions) -> tuple[list[Token], list[LexError]]:
    """Read and tokenize a file. Without keep_going, at most one error is returned."""
    from asllex.scanner import scan_all, tokenize

    source = options.input_file.read_text(encoding="utf-8")
    filename = str(options.input_file)
    log.debug("lexing %s (%d chars)", filename, len(source))

    if options.keep_going:
        tokens, errors = scan_all(source, filename)
    else:
        try:
            tokens, errors = tokenize(source, filename), []
        except LexError as exc:
            return [], [exc]

    if not options.hidden:
        tokens = [t for t in tokens if not t.hidden]
    return tokens, errors


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    from asllex.dump import dump_tokens

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        tokens, errors = lex_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    if errors:
        for exc in errors:
            if options.keep_going:
                print(f"{options.input_file}: {exc.describe()}", file=sys.stderr)
            else:
                print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    if options.output_file:
        try:
            with open(options.output_file, "w", encoding="utf-8") as f:
                dump_tokens(tokens, fmt=options.fmt, file=f)
        except OSError as exc:
            print(f"error: cannot write {options.output_file}: {exc}", file=sys.stderr)
            return 2
    else:
        dump_tokens(tokens, fmt=options.fmt, file=sys.stdout)

    return 0
