# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders usage lines and help screens for an `ArgumentParser`.

`HelpFormatter` lays the text out the way argparse does (an 80 column usage line
wrapped under the program name, help text starting at column 24) and can either
return it as plain text or print it through a rich `Console`, styling headings,
the usage line and the argument invocations with the argmatch theme.

Layout is best-effort; nothing in the engine depends on it.
"""
from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from argmatch.parser.argument import ArgumentSpec
from argmatch.parser.argument_action import ArgumentAction

if TYPE_CHECKING:
    from argmatch.parser.argument_parser import ArgumentParser, SubcommandGroup

Line = tuple[str, str]


def format_metavar(spec: ArgumentSpec) -> str:
    """Format the values part of an argument: `OUT`, `[OUT ...]`, `A A`."""
    if not spec.action.takes_values:
        return ""
    metavar = spec.get_metavar()
    nargs = spec.nargs
    if nargs is None:
        return metavar
    if nargs == "?":
        return f"[{metavar}]"
    if nargs == "*":
        return f"[{metavar} ...]"
    if nargs == "+":
        return f"{metavar} [{metavar} ...]"
    return " ".join([metavar] * nargs)


def format_invocation(spec: ArgumentSpec) -> str:
    """Format the left column of a help entry: `-o OUT, --out OUT`."""
    if spec.positional:
        return spec.metavar or spec.dest
    values = format_metavar(spec)
    if not values:
        return ", ".join(spec.flags)
    return ", ".join(f"{flag} {values}" for flag in spec.flags)


def format_usage_part(spec: ArgumentSpec) -> str:
    """Format one argument for the usage line."""
    if spec.positional:
        return format_metavar(spec) or spec.dest
    part = spec.flags[0]
    values = format_metavar(spec)
    if values:
        part = f"{part} {values}"
    if spec.required:
        return part
    return f"[{part}]"


class HelpFormatter:
    """
    Formats usage and help output for one parser.

    Args:
        parser (ArgumentParser): The parser to describe.
        width (int): Maximum line width.
        help_position (int): Column at which help text starts.
    """

    def __init__(
        self,
        parser: ArgumentParser,
        width: int = 80,
        help_position: int = 24,
    ) -> None:
        self.parser = parser
        self.width = width
        self.help_position = help_position

    def _visible(self, specs: tuple[ArgumentSpec, ...]) -> list[ArgumentSpec]:
        return [spec for spec in specs if not spec.suppressed]

    def _usage_parts(self) -> list[str]:
        spec_set = self.parser.spec_set()
        parts = [format_usage_part(spec) for spec in self._visible(spec_set.optionals)]
        for spec in self._visible(spec_set.positionals):
            if spec is spec_set.subcommand:
                parts.append(f"{spec.get_metavar()} ...")
            else:
                parts.append(format_usage_part(spec))
        return parts

    def format_usage(self) -> str:
        """Return the usage line, wrapped to the formatter width."""
        if self.parser.usage:
            return f"usage: {self.parser.usage}"
        prefix = f"usage: {self.parser.prog}"
        parts = self._usage_parts()
        if not parts:
            return prefix
        indent = " " * (len(prefix) + 1)
        lines: list[str] = []
        current, has_parts = prefix, False
        for part in parts:
            if has_parts and len(current) + 1 + len(part) > self.width:
                lines.append(current)
                current = f"{indent}{part}"
                continue
            current = f"{current} {part}"
            has_parts = True
        lines.append(current)
        return "\n".join(lines)

    def _entry(self, invocation: str, help_text: str, indent: int = 2) -> list[Line]:
        lead = " " * indent + invocation
        help_width = max(self.width - self.help_position, 11)
        wrapped = textwrap.wrap(help_text, help_width) if help_text else []
        if not wrapped:
            return [(lead, "flag")]
        padding = " " * self.help_position
        if len(lead) <= self.help_position - 2:
            lines = [(f"{lead:<{self.help_position}}{wrapped[0]}", "flag")]
        else:
            lines = [(lead, "flag"), (f"{padding}{wrapped[0]}", "")]
        lines.extend((f"{padding}{line}", "") for line in wrapped[1:])
        return lines

    def _subcommand_lines(self, group: SubcommandGroup) -> list[Line]:
        lines = self._entry(group.spec.get_metavar(), group.help)
        for name, help_text in group.choices_help():
            lines.extend(self._entry(name, help_text, indent=4))
        return lines

    def _help_lines(self) -> list[Line]:
        spec_set = self.parser.spec_set()
        group = self.parser.subparsers
        lines: list[Line] = []
        for usage_line in self.format_usage().splitlines():
            lines.append((usage_line, "usage"))

        if self.parser.description:
            lines.append(("", ""))
            lines.extend(
                (line, "") for line in textwrap.wrap(self.parser.description, self.width)
            )

        positionals: list[Line] = []
        for spec in self._visible(spec_set.positionals):
            if group is not None and spec is spec_set.subcommand:
                if not group.title:
                    positionals.extend(self._subcommand_lines(group))
                continue
            positionals.extend(self._entry(format_invocation(spec), spec.help))
        if positionals:
            lines.append(("", ""))
            lines.append(("positional arguments:", "heading"))
            lines.extend(positionals)

        optionals = [
            entry
            for spec in self._visible(spec_set.optionals)
            for entry in self._entry(format_invocation(spec), self._optional_help(spec))
        ]
        if optionals:
            lines.append(("", ""))
            lines.append(("options:", "heading"))
            lines.extend(optionals)

        if group is not None and group.title:
            lines.append(("", ""))
            lines.append((f"{group.title}:", "heading"))
            lines.extend(self._subcommand_lines(group))

        if self.parser.epilog:
            lines.append(("", ""))
            lines.extend((line, "dim") for line in textwrap.wrap(self.parser.epilog, self.width))
        return lines

    def _optional_help(self, spec: ArgumentSpec) -> str:
        if spec.action == ArgumentAction.HELP and not spec.help:
            return "show this help message and exit"
        return spec.help

    def format_help(self) -> str:
        """Return the full help screen as plain text."""
        return "\n".join(line for line, _ in self._help_lines()) + "\n"

    def render_usage(self, console: Console) -> None:
        for line in self.format_usage().splitlines():
            console.print(Text(line, style="usage"))

    def render_help(self, console: Console) -> None:
        """Print the help screen through a rich console."""
        for line, style in self._help_lines():
            console.print(Text(line, style=style or ""))
