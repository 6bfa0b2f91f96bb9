"""Command-line interface for polyeq."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from polyeq.driver import (
    DEFAULT_PROMPT,
    DEFAULT_QUIT_MARKER,
    analyze_line,
    format_report,
    format_token_list,
    read_loop,
    rejection,
)
from polyeq.errors import LexError

CONFIG_NAME = "polyeq.toml"

EXIT_OK = 0
EXIT_NOT_EQUATION = 1
EXIT_ERROR = 2


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    checks: list[str]
    prompt: str
    quit_marker: str
    show_tokens: bool
    integer_exponents: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="polyeq",
        description="Recognize single-variable polynomial equations and report their degree",
    )
    p.add_argument(
        "input",
        nargs="?",
        help="File with one equation per line (default: interactive prompt)",
    )
    p.add_argument(
        "-c",
        "--check",
        action="append",
        default=[],
        metavar="EQUATION",
        help="Classify EQUATION and exit (repeatable)",
    )
    p.add_argument(
        "--show-tokens",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Echo the token list before each report",
    )
    p.add_argument(
        "--integer-exponents",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reject exponents that are not whole numbers",
    )
    p.add_argument("--prompt", default=None, help=f"Interactive prompt (default: {DEFAULT_PROMPT!r})")
    p.add_argument(
        "--quit-marker",
        default=None,
        metavar="TEXT",
        help=f"Input prefix that ends the interactive loop (default: {DEFAULT_QUIT_MARKER!r})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Dump tokens, and where each rejected line stopped, to stderr",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log recognizer decisions")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _table(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)
    cfg_recognizer = _table(config, "recognizer")
    cfg_repl = _table(config, "repl")

    integer_exponents = False
    if isinstance(cfg_recognizer.get("integer_exponents"), bool):
        integer_exponents = cfg_recognizer["integer_exponents"]
    if args.integer_exponents is not None:
        integer_exponents = args.integer_exponents

    prompt = DEFAULT_PROMPT
    if isinstance(cfg_repl.get("prompt"), str):
        prompt = cfg_repl["prompt"]
    if args.prompt is not None:
        prompt = args.prompt

    quit_marker = DEFAULT_QUIT_MARKER
    if isinstance(cfg_repl.get("quit_marker"), str) and cfg_repl["quit_marker"]:
        quit_marker = cfg_repl["quit_marker"]
    if args.quit_marker:
        quit_marker = args.quit_marker

    show_tokens = True
    if isinstance(cfg_repl.get("show_tokens"), bool):
        show_tokens = cfg_repl["show_tokens"]
    if args.show_tokens is not None:
        show_tokens = args.show_tokens

    return CliOptions(
        input_file=input_file,
        checks=list(args.check),
        prompt=prompt,
        quit_marker=quit_marker,
        show_tokens=show_tokens,
        integer_exponents=integer_exponents,
        debug=args.debug,
        verbose=args.verbose,
    )


def setup_logging(verbose: bool) -> None:
    """Attach a stderr handler to the package logger when verbose."""
    log = logging.getLogger("polyeq")
    if not verbose:
        return
    log.setLevel(logging.DEBUG)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        log.addHandler(h)


def classify_lines(
    lines: list[tuple[str, str]],
    options: CliOptions,
    filename: str,
    out: TextIO,
    err: TextIO,
) -> int:
    """Report on each (label, source) pair and return the exit code."""
    from polyeq.debug import dump_tokens

    code = EXIT_OK
    for label, source in lines:
        try:
            report = analyze_line(source, integer_exponents=options.integer_exponents)
        except LexError as exc:
            print(f"{label}{exc.format(filename)}", file=err)
            code = EXIT_ERROR
            continue

        if options.debug:
            dump_tokens(report.tokens, file=err)
            if not report.valid:
                print(f"{label}{rejection(report).format(filename)}", file=err)
        if options.show_tokens:
            out.write(f"{label}the token list is {format_token_list(report.tokens)}\n")
        out.write(f"{label}{format_report(report)}\n")

        if not report.valid and code == EXIT_OK:
            code = EXIT_NOT_EQUATION
    return code


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(options.verbose)

    if options.checks:
        lines = [("", source) for source in options.checks]
        return classify_lines(lines, options, "<check>", sys.stdout, sys.stderr)

    if options.input_file is not None:
        try:
            text = options.input_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
            return EXIT_ERROR
        lines = [
            (f"{lineno}: ", source)
            for lineno, source in enumerate(text.splitlines(), start=1)
            if source.strip()
        ]
        return classify_lines(lines, options, str(options.input_file), sys.stdout, sys.stderr)

    read_loop(
        sys.stdin,
        sys.stdout,
        prompt=options.prompt,
        quit_marker=options.quit_marker,
        show_tokens=options.show_tokens,
        integer_exponents=options.integer_exponents,
        debug=options.debug,
        stderr=sys.stderr,
    )
    return EXIT_OK
