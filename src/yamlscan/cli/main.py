# Copyright 2026 yamlscan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the yamlscan command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yamlscan.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    OutputFormat,
    ScannerConfig,
    find_config,
    load_config,
)
from yamlscan.scanner.errors import ScanError
from yamlscan.scanner.scanner import tokenize
from yamlscan.serialization import format_tokens, serialize

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the yamlscan CLI."""
    parser = argparse.ArgumentParser(
        prog="yamlscan",
        description="yamlscan: lexical scanner for YAML documents",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a scanner configuration file (default: ./{CONFIG_FILE_NAME} if present)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # tokens subcommand
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the token stream of a file",
        description="Scan a YAML file and print its tokens in order.",
    )
    tokens_parser.add_argument("file", help="File to scan")
    tokens_parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=None,
        help="Output format (default: from the configuration, else text)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that files scan without errors",
        description="Scan each file and report the first scan error, if any.",
    )
    check_parser.add_argument("files", nargs="+", help="Files to check")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "tokens":
        return _cmd_tokens(args, config)
    if args.command == "check":
        return _cmd_check(args, config)
    return 0


def _load_config(path: str | None) -> ScannerConfig:
    """Load the explicit config file, or the one in the working directory, or defaults."""
    if path is not None:
        return load_config(Path(path))
    found = find_config(Path.cwd())
    if found is None:
        return ScannerConfig()
    return load_config(found)


def _read_source(path: Path) -> str | None:
    """Read a file, reporting failures on stderr."""
    if not path.is_file():
        print(f"Error: file '{path}' does not exist.", file=sys.stderr)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return None


def _cmd_tokens(args: argparse.Namespace, config: ScannerConfig) -> int:
    """Handle the tokens subcommand."""
    path = Path(args.file)
    source = _read_source(path)
    if source is None:
        return 1

    try:
        tokens = tokenize(source, config)
    except ScanError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return 1

    output_format = OutputFormat(args.format) if args.format else config.output_format
    if output_format is OutputFormat.JSON:
        print(serialize(tokens))
    elif tokens:
        print(format_tokens(tokens))
    return 0


def _cmd_check(args: argparse.Namespace, config: ScannerConfig) -> int:
    """Handle the check subcommand."""
    has_errors = False
    for name in args.files:
        path = Path(name)
        source = _read_source(path)
        if source is None:
            has_errors = True
            continue
        try:
            tokenize(source, config)
        except ScanError as exc:
            print(f"Error: {path}: {exc}", file=sys.stderr)
            has_errors = True
            continue
        print(f"OK: {path}")

    if has_errors:
        return 1

    print(f"Checked {len(args.files)} file(s), no issues found.")
    return 0
