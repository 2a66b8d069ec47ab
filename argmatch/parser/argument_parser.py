# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentParser`, the declaration layer in front of the
argmatch match engine, and `SubcommandGroup`, its subcommand registry.

`ArgumentParser` collects immutable `ArgumentSpec` declarations, freezes them
into a cached `SpecSet`, and hands token lists to a `MatchEngine`. It owns the
policies the engine deliberately leaves out: reading argument files, dispatching
to subcommand parsers, rendering help, and deciding whether a failure prints
and exits or raises.

Key Features:
- Declarative argument registration via `add_argument()`
- argparse actions, arities, choices, defaults and required optionals
- Unambiguous flag abbreviations and POSIX-style flag clusters (`-abc`)
- Subcommands via `add_subparsers()` / `add_parser()`, with aliases
- Inherited declarations via `parents=[...]`
- Argument files via `fromfile_prefix_chars`
- Rich-powered usage and help rendering

Public Interface:
- `add_argument(...)`: Register a new argument.
- `add_subparsers(...)`: Declare the subcommand slot.
- `match(tokens)`: Return a `ParseOutcome` without printing or exiting.
- `parse_args(tokens)`: Return a `Namespace`, or print and exit on help/errors.
- `format_usage()`, `format_help()`, `print_usage()`, `print_help()`.

Example Usage:
    parser = ArgumentParser(prog="copy")
    parser.add_argument("files", nargs="+")
    parser.add_argument("--out", required=True)
    parser.add_argument("--verbose", action="store_true")

    args = parser.parse_args(["--out", "result.txt", "a.txt", "b.txt", "--verbose"])

    # args.out == "result.txt", args.files == ["a.txt", "b.txt"], args.verbose is True
"""
from __future__ import annotations

import sys
from dataclasses import replace
from typing import Any, Iterable, Sequence

from rich.console import Console
from rich.text import Text

from argmatch.console import console, error_console
from argmatch.exceptions import ArgumentError, ArgumentFileError, ConfigurationError
from argmatch.logger import logger
from argmatch.parser.argument import ArgumentSpec, create_argument
from argmatch.parser.argument_action import ArgumentAction
from argmatch.parser.engine import MatchEngine
from argmatch.parser.help_formatter import HelpFormatter
from argmatch.parser.namespace import RESERVED_DESTS, Namespace
from argmatch.parser.parser_types import (
    Failed,
    HelpRequested,
    Matched,
    ParseOutcome,
    SpecSet,
    VersionRequested,
)
from argmatch.signals import HelpSignal, VersionSignal
from argmatch.utils import get_program_invocation


class SubcommandGroup:
    """
    The subcommands of one parser.

    Created by `ArgumentParser.add_subparsers()`. Each `add_parser()` call
    returns a child `ArgumentParser` that handles the tokens following its
    name.
    """

    def __init__(
        self,
        parent: ArgumentParser,
        dest: str | None = None,
        required: bool = False,
        title: str = "",
        help: str = "",
        metavar: str | None = None,
    ) -> None:
        self.parent = parent
        self.dest = dest.strip() if dest else None
        self.required = required
        self.title = title
        self.help = help
        self.metavar = metavar
        self._parsers: dict[str, ArgumentParser] = {}
        self._commands: list[tuple[str, tuple[str, ...], str]] = []
        self._spec: ArgumentSpec | None = None

    def add_parser(
        self,
        name: str,
        help: str = "",
        aliases: Iterable[str] | None = None,
        **kwargs: Any,
    ) -> ArgumentParser:
        """
        Register a subcommand and return its parser.

        Args:
            name (str): The command name.
            help (str): One-line description shown in the parent's help.
            aliases (Iterable[str] | None): Alternative names.
            **kwargs: Passed to the child `ArgumentParser`.
        """
        aliases = tuple(aliases or ())
        for command in (name, *aliases):
            if not command or not command.strip():
                raise ConfigurationError("Subcommand names must not be empty")
            if command in self._parsers:
                raise ConfigurationError(f"conflicting subparser: {command}")
        kwargs.setdefault("prog", f"{self.parent.prog} {name}")
        kwargs.setdefault("prefix_chars", self.parent.prefix_chars)
        kwargs.setdefault("exit_on_error", self.parent.exit_on_error)
        kwargs.setdefault("description", help)
        parser = ArgumentParser(**kwargs)
        for command in (name, *aliases):
            self._parsers[command] = parser
        self._commands.append((name, aliases, help))
        self._spec = None
        logger.debug("Registered subcommand '%s' on '%s'", name, self.parent.prog)
        return parser

    @property
    def names(self) -> list[str]:
        """Every accepted command name, aliases included."""
        return list(self._parsers)

    @property
    def spec(self) -> ArgumentSpec:
        """The positional slot that receives the command name."""
        if self._spec is None:
            if not self._commands:
                raise ConfigurationError("Subcommand group has no parsers")
            spec = create_argument(
                self.dest or "command",
                prefix_chars=self.parent.prefix_chars,
                choices=self.names,
                help=self.help,
                metavar=self.metavar,
            )
            self._spec = replace(spec, required=self.required)
        return self._spec

    def get_parser(self, name: str) -> ArgumentParser:
        return self._parsers[name]

    def choices_help(self) -> list[tuple[str, str]]:
        """Return (display name, help) pairs for the help screen."""
        entries = []
        for name, aliases, help_text in self._commands:
            display = f"{name} ({', '.join(aliases)})" if aliases else name
            entries.append((display, help_text))
        return entries


class ArgumentParser:
    """
    Declares arguments and matches command-line tokens against them.

    Args:
        prog (str | None): Program name used in usage and error output.
        usage (str | None): Replaces the generated usage line.
        description (str): Text shown after the usage line in help output.
        epilog (str): Text shown at the end of help output.
        parents (Sequence[ArgumentParser] | None): Parsers whose arguments are
            inherited, ahead of this parser's own.
        prefix_chars (str): Characters that introduce optional flags.
        fromfile_prefix_chars (str): Characters that mark argument files.
        argument_default (str): Default for every optional without its own.
        add_help (bool): Add the `-h/--help` flag.
        allow_abbrev (bool): Accept unambiguous prefixes of long flags.
        exit_on_error (bool): Exit the process from `parse_args()` on errors.
    """

    def __init__(
        self,
        prog: str | None = None,
        usage: str | None = None,
        description: str = "",
        epilog: str = "",
        parents: Sequence[ArgumentParser] | None = None,
        prefix_chars: str = "-",
        fromfile_prefix_chars: str = "",
        argument_default: str = "",
        add_help: bool = True,
        allow_abbrev: bool = True,
        exit_on_error: bool = True,
    ) -> None:
        if not prefix_chars:
            raise ConfigurationError("prefix_chars must not be empty")
        self.console: Console = console
        self.error_console: Console = error_console
        self.prog: str = prog or get_program_invocation()
        self.usage: str | None = usage
        self.description: str = description
        self.epilog: str = epilog
        self.prefix_chars: str = prefix_chars
        self.fromfile_prefix_chars: str = fromfile_prefix_chars
        self.argument_default: str = str(argument_default).strip()
        self.add_help: bool = add_help
        self.allow_abbrev: bool = allow_abbrev
        self.exit_on_error: bool = exit_on_error
        self._positionals: list[ArgumentSpec] = []
        self._optionals: list[ArgumentSpec] = []
        self._flag_map: dict[str, ArgumentSpec] = {}
        self._dest_set: set[str] = set()
        self._subparsers: SubcommandGroup | None = None
        self._owns_subparsers: bool = False
        self._spec_set: SpecSet | None = None
        if add_help:
            self._add_help()
        for parent in parents or []:
            self._inherit(parent)

    def _add_help(self) -> None:
        """Add help argument to the parser."""
        prefix = self.prefix_chars[0]
        self.add_argument(
            f"{prefix}h",
            f"{prefix * 2}help",
            action=ArgumentAction.HELP,
            help="show this help message and exit",
        )

    def _inherit(self, parent: ArgumentParser) -> None:
        for spec in parent._positionals + parent._optionals:
            if spec.action == ArgumentAction.HELP and self.add_help:
                continue
            self._register(spec)
        if parent._subparsers is not None:
            if self._subparsers is not None:
                raise ConfigurationError("cannot have multiple subparser arguments")
            self._subparsers = parent._subparsers

    def _invalidate(self) -> None:
        self._spec_set = None

    def _check_dest(self, dest: str, display_name: str) -> None:
        if dest in RESERVED_DESTS:
            raise ConfigurationError(
                f"argument {display_name}: reserved destination: {dest}"
            )
        if dest in self._dest_set:
            raise ConfigurationError(
                f"argument {display_name}: conflicting destination: {dest}"
            )

    def _register(self, spec: ArgumentSpec) -> None:
        if not spec.positional:
            for flag in spec.flags:
                if flag in self._flag_map:
                    raise ConfigurationError(
                        f"argument {spec.display_name}: conflicting option string: {flag}"
                    )
        if not spec.action.short_circuits:
            self._check_dest(spec.dest, spec.display_name)
            self._dest_set.add(spec.dest)
        if spec.positional:
            self._positionals.append(spec)
        else:
            for flag in spec.flags:
                self._flag_map[flag] = spec
            self._optionals.append(spec)
        self._invalidate()

    def add_argument(self, *flags: str, **kwargs: Any) -> ArgumentSpec:
        """
        Define a new argument for the parser.

        Accepts the keywords of `create_argument()`: `action`, `nargs`, `const`,
        `default`, `choices`, `required`, `help`, `metavar`, `dest`, `version`,
        `callback` and `suppress`.

        Returns:
            ArgumentSpec: The registered, immutable declaration.

        Raises:
            ConfigurationError: If the declaration is invalid or conflicts with
                an earlier one.
        """
        if "prefix_chars" in kwargs:
            raise ConfigurationError("prefix_chars is set on the parser, not per argument")
        spec = create_argument(*flags, prefix_chars=self.prefix_chars, **kwargs)
        if spec.positional and self._owns_subparsers:
            raise ConfigurationError(
                f"positional argument '{spec.dest}' must be declared before add_subparsers()"
            )
        self._register(spec)
        return spec

    def add_subparsers(
        self,
        dest: str | None = None,
        required: bool = False,
        title: str = "",
        help: str = "",
        metavar: str | None = None,
    ) -> SubcommandGroup:
        """
        Declare the subcommand slot.

        The slot follows every positional declared so far. Tokens after the
        command name are matched by the chosen subcommand's parser.

        Args:
            dest (str | None): Key that receives the command name.
            required (bool): Fail when no command is given.
            title (str): Show commands in their own help section.
            help (str): Help text for the command slot.
            metavar (str | None): Display name replacing `{a,b}` in help.
        """
        if self._subparsers is not None:
            raise ConfigurationError("cannot have multiple subparser arguments")
        if dest and dest.strip():
            self._check_dest(dest.strip(), dest.strip())
        self._subparsers = SubcommandGroup(
            self, dest=dest, required=required, title=title, help=help, metavar=metavar
        )
        self._owns_subparsers = True
        if self._subparsers.dest:
            self._dest_set.add(self._subparsers.dest)
        self._invalidate()
        return self._subparsers

    @property
    def subparsers(self) -> SubcommandGroup | None:
        return self._subparsers

    def spec_set(self) -> SpecSet:
        """Return the frozen declaration view, rebuilt after every declaration."""
        subcommand = self._subparsers.spec if self._subparsers else None
        if self._spec_set is None or self._spec_set.subcommand is not subcommand:
            self._spec_set = SpecSet.freeze(
                positionals=self._positionals,
                optionals=self._optionals,
                prefix_chars=self.prefix_chars,
                allow_abbrev=self.allow_abbrev,
                argument_default=self.argument_default,
                subcommand=subcommand,
            )
        return self._spec_set

    def get_argument(self, dest: str) -> ArgumentSpec | None:
        """Return the declaration bound to a destination or flag."""
        if dest in self._flag_map:
            return self._flag_map[dest]
        return next(
            (
                spec
                for spec in self._positionals + self._optionals
                if spec.dest == dest and not spec.action.short_circuits
            ),
            None,
        )

    def get_default(self, dest: str) -> str | list[str] | None:
        """Return the effective default of an argument, or None."""
        spec = self.get_argument(dest)
        if spec is None:
            return None
        if isinstance(spec.default, tuple):
            return list(spec.default)
        if spec.default:
            return spec.default
        if spec.action.takes_values or spec.action == ArgumentAction.STORE_CONST:
            return self.argument_default or None
        return None

    def _read_args_from_files(self, tokens: Sequence[str]) -> list[str]:
        if not self.fromfile_prefix_chars:
            return list(tokens)
        expanded: list[str] = []
        for token in tokens:
            if not token or token[0] not in self.fromfile_prefix_chars:
                expanded.append(token)
                continue
            path = token[1:]
            try:
                with open(path, "r", encoding="UTF-8") as file:
                    lines = file.read().splitlines()
            except OSError as error:
                raise ArgumentFileError(path, error.strerror or "cannot read file") from error
            logger.debug("Read %d argument(s) from '%s'", len(lines), path)
            expanded.extend(self.convert_arg_line_to_args(line) for line in lines)
        return expanded

    def convert_arg_line_to_args(self, line: str) -> str:
        """Convert one line of an argument file into a token."""
        return line

    def match(self, tokens: Sequence[str]) -> ParseOutcome:
        """
        Match tokens and return the outcome without printing or exiting.

        Returns:
            ParseOutcome: `Matched`, `HelpRequested`, `VersionRequested` or
                `Failed`. Declaration errors raise `ConfigurationError`.
        """
        try:
            expanded = self._read_args_from_files(tokens)
            engine = MatchEngine(self.spec_set())
            namespace, dispatch, consumed = engine.match(expanded)
        except HelpSignal:
            return HelpRequested(self)
        except VersionSignal as signal:
            return VersionRequested(signal.version, self)
        except ArgumentError as error:
            logger.debug("Match failed for '%s': %s", self.prog, error)
            return Failed(error, self)

        group = self._subparsers
        if group is None:
            return Matched(namespace, consumed)
        if dispatch is None:
            if group.dest:
                namespace.bind(group.dest, ArgumentAction.STORE, [])
            return Matched(namespace, consumed)

        if group.dest:
            namespace.bind(group.dest, ArgumentAction.STORE, [dispatch.name])
        outcome = group.get_parser(dispatch.name).match(dispatch.remainder)
        if not isinstance(outcome, Matched):
            return outcome
        namespace.merge(outcome.namespace)
        return Matched(namespace, consumed)

    def parse_args(self, tokens: Sequence[str] | None = None) -> Namespace:
        """
        Match tokens and apply the process policy.

        Help and version requests are rendered and exit with status 0. Errors
        print the usage line and `prog: error: message` to stderr and exit with
        status 1. With `exit_on_error=False`, help and version still render and
        then raise `HelpSignal` / `VersionSignal`; errors are raised as-is.

        Args:
            tokens (Sequence[str] | None): Tokens to match; `sys.argv[1:]` if None.
        """
        if tokens is None:
            tokens = sys.argv[1:]
        outcome = self.match(tokens)

        if isinstance(outcome, Matched):
            return outcome.namespace

        if isinstance(outcome, HelpRequested):
            outcome.parser.print_help()
            if self.exit_on_error:
                sys.exit(0)
            raise HelpSignal()

        if isinstance(outcome, VersionRequested):
            self.console.print(Text(outcome.version))
            if self.exit_on_error:
                sys.exit(0)
            raise VersionSignal(outcome.version)

        if not self.exit_on_error:
            raise outcome.error
        parser = outcome.parser or self
        parser.print_usage(self.error_console)
        self.error_console.print(
            Text(f"{parser.prog}: error: {outcome.error}", style="error")
        )
        sys.exit(1)

    def _formatter(self) -> HelpFormatter:
        return HelpFormatter(self)

    def format_usage(self) -> str:
        return self._formatter().format_usage()

    def format_help(self) -> str:
        return self._formatter().format_help()

    def print_usage(self, console: Console | None = None) -> None:
        self._formatter().render_usage(console or self.console)

    def print_help(self, console: Console | None = None) -> None:
        """Print formatted help text for this parser using Rich output."""
        self._formatter().render_help(console or self.console)

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        required = sum(spec.required for spec in self._optionals)
        commands = len(self._subparsers.names) if self._subparsers else 0
        return (
            f"ArgumentParser(prog={self.prog!r}, positional={len(self._positionals)}, "
            f"optional={len(self._optionals)}, required={required}, "
            f"subcommands={commands})"
        )

    def __repr__(self) -> str:
        return str(self)
