from io import StringIO

import pytest
from rich.console import Console

from argmatch.console import ARGMATCH_THEME
from argmatch.parser import ArgumentParser, HelpFormatter, create_argument
from argmatch.parser.help_formatter import (
    format_invocation,
    format_metavar,
    format_usage_part,
)


def make_console() -> Console:
    return Console(
        file=StringIO(), theme=ARGMATCH_THEME, width=120, color_system=None
    )


@pytest.fixture
def parser():
    parser = ArgumentParser(
        prog="copy", description="Copy files.", epilog="Files are never overwritten."
    )
    parser.add_argument("files", nargs="+", help="Input files")
    parser.add_argument("-o", "--out", required=True, help="Output file")
    parser.add_argument("--verbose", action="store_true", help="Be chatty")
    return parser


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({}, "OUT"),
        ({"nargs": "?"}, "[OUT]"),
        ({"nargs": "*"}, "[OUT ...]"),
        ({"nargs": "+"}, "OUT [OUT ...]"),
        ({"nargs": 2}, "OUT OUT"),
        ({"metavar": "PATH"}, "PATH"),
        ({"action": "store_true"}, ""),
    ],
)
def test_format_metavar(kwargs, expected):
    assert format_metavar(create_argument("--out", **kwargs)) == expected


def test_format_invocation():
    assert format_invocation(create_argument("-o", "--out")) == "-o OUT, --out OUT"
    assert format_invocation(create_argument("-q", "--quiet", action="store_true")) == (
        "-q, --quiet"
    )
    assert format_invocation(create_argument("src", metavar="SOURCE")) == "SOURCE"


def test_format_usage_part():
    assert format_usage_part(create_argument("--out")) == "[--out OUT]"
    assert format_usage_part(create_argument("--out", required=True)) == "--out OUT"
    assert format_usage_part(create_argument("files", nargs="*")) == "[files ...]"


def test_usage(parser):
    assert parser.format_usage() == "usage: copy [-h] -o OUT [--verbose] files [files ...]"


def test_custom_usage():
    parser = ArgumentParser(prog="copy", usage="copy SRC DST")
    assert parser.format_usage() == "usage: copy SRC DST"


def test_usage_wraps_under_program_name():
    parser = ArgumentParser(prog="prog")
    for index in range(12):
        parser.add_argument(f"--option-{index}")
    lines = parser.format_usage().splitlines()
    assert len(lines) > 1
    assert all(len(line) <= 80 for line in lines)
    assert all(line.startswith(" " * len("usage: prog ")) for line in lines[1:])


def test_help_layout(parser):
    assert parser.format_help() == "\n".join(
        [
            "usage: copy [-h] -o OUT [--verbose] files [files ...]",
            "",
            "Copy files.",
            "",
            "positional arguments:",
            f"{'  files':<24}Input files",
            "",
            "options:",
            f"{'  -h, --help':<24}show this help message and exit",
            f"{'  -o OUT, --out OUT':<24}Output file",
            f"{'  --verbose':<24}Be chatty",
            "",
            "Files are never overwritten.",
        ]
    ) + "\n"


def test_long_invocation_moves_help_to_next_line():
    parser = ArgumentParser(prog="prog", add_help=False)
    parser.add_argument("--a-very-long-option-name", help="Does things")
    lines = parser.format_help().splitlines()
    index = lines.index("  --a-very-long-option-name A_VERY_LONG_OPTION_NAME")
    assert lines[index + 1] == " " * 24 + "Does things"


def test_suppressed_arguments_are_hidden():
    parser = ArgumentParser(prog="prog")
    parser.add_argument("--secret", suppress=True)
    assert "--secret" not in parser.format_help()
    assert "--secret" not in parser.format_usage()


def test_subcommands_in_help():
    parser = ArgumentParser(prog="tool", add_help=False)
    commands = parser.add_subparsers(dest="command", help="command to run")
    commands.add_parser("build", help="Build it", aliases=["b"])
    commands.add_parser("check", help="Check it")
    assert parser.format_usage() == "usage: tool {build,b,check} ..."
    help_text = parser.format_help()
    assert "positional arguments:" in help_text
    assert f"{'  {build,b,check}':<24}command to run" in help_text
    assert f"{'    build (b)':<24}Build it" in help_text
    assert f"{'    check':<24}Check it" in help_text


def test_titled_subcommand_section():
    parser = ArgumentParser(prog="tool", add_help=False)
    commands = parser.add_subparsers(title="commands", metavar="COMMAND")
    commands.add_parser("run", help="Run it")
    lines = parser.format_help().splitlines()
    assert "positional arguments:" not in lines
    assert lines[0] == "usage: tool COMMAND ..."
    assert lines[-3:] == ["commands:", "  COMMAND", f"{'    run':<24}Run it"]


def test_render_help_matches_plain_text(parser):
    console = make_console()
    parser.print_help(console)
    assert console.file.getvalue() == parser.format_help()


def test_render_usage(parser):
    console = make_console()
    parser.print_usage(console)
    assert console.file.getvalue() == parser.format_usage() + "\n"


def test_formatter_width():
    parser = ArgumentParser(prog="prog", add_help=False)
    parser.add_argument("--name", help="word " * 30)
    formatter = HelpFormatter(parser, width=60, help_position=20)
    lines = formatter.format_help().splitlines()
    assert all(len(line) <= 60 for line in lines)
