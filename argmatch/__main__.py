"""
Argmatch Argument Engine

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.

Command line entry point: match tokens against a declaration file.

    argmatch copy.yaml -- --out result.txt a.txt b.txt --verbose
"""
from __future__ import annotations

import logging
import sys
from typing import Sequence

from rich.table import Table
from rich.text import Text

from argmatch.config import load_parser
from argmatch.console import console, error_console
from argmatch.exceptions import ConfigurationError
from argmatch.logger import logger
from argmatch.parser import (
    ArgumentParser,
    Failed,
    HelpRequested,
    Matched,
    Namespace,
    VersionRequested,
)
from argmatch.utils import setup_logging
from argmatch.version import __version__


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="argmatch",
        description=(
            "Match command-line tokens against a YAML or TOML argument "
            "declaration and print the resulting bindings."
        ),
        epilog="Put '--' before the tokens when they start with a flag.",
    )
    parser.add_argument("declaration", help="YAML or TOML declaration file")
    parser.add_argument("tokens", nargs="*", help="tokens to match")
    parser.add_argument(
        "-v", "--verbose", action="count", help="increase log output (repeatable)"
    )
    parser.add_argument(
        "--json", action="store_true", help="print the bindings as JSON"
    )
    parser.add_argument(
        "--version", action="version", version=f"argmatch {__version__}"
    )
    return parser


def console_log_level(verbosity: int) -> int:
    """Map `-v` occurrences to a console log level."""
    return max(logging.WARNING - 10 * verbosity, logging.DEBUG)


def render_table(namespace: Namespace, title: str) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("dest", style="flag")
    table.add_column("action", style="dim")
    table.add_column("value", style="metavar")
    for dest in namespace:
        table.add_row(
            Text(dest), Text(str(namespace.action(dest))), Text(namespace.to_string(dest))
        )
    return table


def main(argv: Sequence[str] | None = None) -> int:
    args = get_parser().parse_args(argv)
    setup_logging(log_filename=None, console_log_level=console_log_level(args.verbose))

    try:
        target = load_parser(args.declaration)
    except (FileNotFoundError, ConfigurationError) as error:
        logger.debug("Could not load '%s'", args.declaration, exc_info=True)
        error_console.print(Text(f"argmatch: error: {error}", style="error"))
        return 1

    try:
        outcome = target.match(args.tokens)
    except ConfigurationError as error:
        error_console.print(Text(f"argmatch: error: {error}", style="error"))
        return 1

    if isinstance(outcome, Matched):
        if args.json:
            console.print_json(data=outcome.namespace.as_dict())
        else:
            console.print(render_table(outcome.namespace, target.prog))
        return 0

    if isinstance(outcome, HelpRequested):
        outcome.parser.print_help()
        return 0

    if isinstance(outcome, VersionRequested):
        console.print(Text(outcome.version))
        return 0

    assert isinstance(outcome, Failed)
    parser = outcome.parser or target
    parser.print_usage(error_console)
    error_console.print(Text(f"{parser.prog}: error: {outcome.error}", style="error"))
    return 1


if __name__ == "__main__":
    sys.exit(main())
