import pytest

from argmatch.exceptions import (
    AmbiguousAbbreviationError,
    ConfigurationError,
    ErrorKind,
    InvalidChoiceError,
    MissingRequiredError,
    UnrecognizedArgumentsError,
)
from argmatch.parser import ArgumentParser, Failed, Matched
from argmatch.signals import HelpSignal, VersionSignal


def build_parser_and_parse(args, config, **parser_kwargs):
    parser_kwargs.setdefault("exit_on_error", False)
    parser = ArgumentParser(prog="prog", **parser_kwargs)
    config(parser)
    return parser.parse_args(args)


def test_copy_example():
    def config(parser):
        parser.add_argument("files", nargs="+")
        parser.add_argument("--out", required=True)
        parser.add_argument("--verbose", action="store_true")

    args = build_parser_and_parse(
        ["--out", "result.txt", "a.txt", "b.txt", "--verbose"], config
    )
    assert args.out == "result.txt"
    assert args.files == ["a.txt", "b.txt"]
    assert args.verbose is True


def test_required_arguments_are_reported_together():
    def config(parser):
        parser.add_argument("--name", required=True)
        parser.add_argument("-o", "--out", required=True)
        parser.add_argument("src")
        parser.add_argument("dst")

    with pytest.raises(MissingRequiredError) as exc_info:
        build_parser_and_parse([], config)
    error = exc_info.value
    assert error.kind == ErrorKind.MISSING_REQUIRED
    assert error.missing == ["--name", "-o/--out", "src", "dst"]
    assert str(error) == (
        "the following arguments are required: --name -o/--out src dst"
    )


def test_choices_are_validated_for_optionals_and_positionals():
    def config(parser):
        parser.add_argument("--mode", choices=["fast", "safe"])
        parser.add_argument("target", choices=["x", "y"])

    assert build_parser_and_parse(["--mode", "fast", "x"], config).mode == "fast"
    with pytest.raises(InvalidChoiceError) as exc_info:
        build_parser_and_parse(["--mode", "slow", "x"], config)
    assert str(exc_info.value) == (
        "argument --mode: invalid choice: 'slow' (choose from 'fast', 'safe')"
    )
    with pytest.raises(InvalidChoiceError, match="argument target"):
        build_parser_and_parse(["z"], config)


def test_quoted_choice_is_accepted():
    def config(parser):
        parser.add_argument("--mode", choices=["fast"])

    args = build_parser_and_parse(["--mode", "'fast'"], config)
    assert args.mode == "fast"


def test_ambiguous_abbreviation():
    def config(parser):
        parser.add_argument("--foo")
        parser.add_argument("--foobar")

    with pytest.raises(AmbiguousAbbreviationError):
        build_parser_and_parse(["--fo", "1"], config)
    assert build_parser_and_parse(["--foob", "1"], config).foobar == "1"


def test_abbreviations_can_be_disabled():
    def config(parser):
        parser.add_argument("--foobar")

    with pytest.raises(UnrecognizedArgumentsError) as exc_info:
        build_parser_and_parse(["--foob", "1"], config, allow_abbrev=False)
    assert exc_info.value.tokens == ["--foob", "1"]


def test_end_of_options_marker():
    def config(parser):
        parser.add_argument("--flag", action="store_true")
        parser.add_argument("items", nargs="*")

    args = build_parser_and_parse(["a", "--", "--flag", "-x"], config)
    assert args.items == ["a", "--flag", "-x"]
    assert args.flag is False


def test_unknown_optional_is_unrecognized():
    def config(parser):
        parser.add_argument("--known")

    with pytest.raises(UnrecognizedArgumentsError) as exc_info:
        build_parser_and_parse(["--unknown", "--known", "1"], config)
    assert exc_info.value.tokens == ["--unknown"]


def test_missing_and_unrecognized_are_combined():
    def config(parser):
        parser.add_argument("--name", required=True)

    with pytest.raises(MissingRequiredError) as exc_info:
        build_parser_and_parse(["extra"], config)
    assert str(exc_info.value) == (
        "the following arguments are required: --name; unrecognized arguments: extra"
    )


def test_argument_default():
    def config(parser):
        parser.add_argument("--a")
        parser.add_argument("--b", default="own")
        parser.add_argument("--c", action="store_true")
        parser.add_argument("rest", nargs="?")

    args = build_parser_and_parse([], config, argument_default="shared")
    assert args.a == "shared"
    assert args.b == "own"
    assert args.c is False
    assert args.rest == "shared"


def test_parents_are_inherited_first():
    base = ArgumentParser(prog="base", add_help=False)
    base.add_argument("--config")
    base.add_argument("src")

    parser = ArgumentParser(prog="prog", parents=[base], exit_on_error=False)
    parser.add_argument("dst")
    args = parser.parse_args(["a", "b", "--config", "c.yaml"])
    assert (args.src, args.dst, args.config) == ("a", "b", "c.yaml")
    assert list(args) == ["src", "dst", "config"]


def test_parent_conflicts():
    base = ArgumentParser(prog="base", add_help=False)
    base.add_argument("-c", "--config")
    parser = ArgumentParser(prog="prog", parents=[base])
    with pytest.raises(ConfigurationError, match="conflicting option string: -c"):
        parser.add_argument("-c", "--count")


def test_conflicting_destination():
    parser = ArgumentParser(prog="prog")
    parser.add_argument("--out")
    with pytest.raises(ConfigurationError, match="conflicting destination: out"):
        parser.add_argument("-o", dest="out")


@pytest.mark.parametrize(
    "flags, kwargs",
    [
        (("values",), {}),
        (("--keys",), {}),
        (("-g",), {"dest": "get"}),
        (("--merge",), {"action": "store_true"}),
    ],
)
def test_namespace_method_names_are_reserved(flags, kwargs):
    parser = ArgumentParser(prog="prog")
    with pytest.raises(ConfigurationError, match="reserved destination"):
        parser.add_argument(*flags, **kwargs)


def test_reserved_subcommand_destination():
    parser = ArgumentParser(prog="prog")
    with pytest.raises(ConfigurationError, match="reserved destination: action"):
        parser.add_subparsers(dest="action")


def test_reserved_name_is_allowed_as_flag_with_other_dest():
    def config(parser):
        parser.add_argument("--values", dest="items", nargs="+")

    assert build_parser_and_parse(["--values", "a", "b"], config).items == ["a", "b"]


def test_prefix_chars_cannot_be_set_per_argument():
    parser = ArgumentParser(prog="prog")
    with pytest.raises(ConfigurationError):
        parser.add_argument("--out", prefix_chars="+")


def test_match_returns_outcome_without_exiting():
    parser = ArgumentParser(prog="prog")
    parser.add_argument("src")
    outcome = parser.match([])
    assert isinstance(outcome, Failed)
    assert outcome.error.missing == ["src"]

    outcome = parser.match(["a"])
    assert isinstance(outcome, Matched)
    assert outcome.positionals_consumed == 1
    assert outcome.namespace.src == "a"


def test_errors_exit_with_status_one(capsys):
    parser = ArgumentParser(prog="prog")
    parser.add_argument("src")
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args([])
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "usage: prog [-h] src" in captured.err
    assert "prog: error: the following arguments are required: src" in captured.err


def test_help_exits_with_status_zero(capsys):
    parser = ArgumentParser(prog="prog", description="Does things.")
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--help"])
    assert exc_info.value.code == 0
    captured = capsys.readouterr()
    assert "usage: prog [-h]" in captured.out
    assert "Does things." in captured.out


def test_version_exits_with_status_zero(capsys):
    parser = ArgumentParser(prog="prog")
    parser.add_argument("--version", action="version", version="prog 2.1")
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0
    assert "prog 2.1" in capsys.readouterr().out


def test_signals_without_exit(capsys):
    parser = ArgumentParser(prog="prog", exit_on_error=False)
    parser.add_argument("--version", action="version", version="prog 2.1")
    with pytest.raises(HelpSignal):
        parser.parse_args(["-h"])
    with pytest.raises(VersionSignal) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.version == "prog 2.1"
    assert "usage: prog" in capsys.readouterr().out


def test_parse_args_defaults_to_sys_argv(monkeypatch):
    parser = ArgumentParser(prog="prog", exit_on_error=False)
    parser.add_argument("src")
    monkeypatch.setattr("sys.argv", ["prog", "from-argv"])
    assert parser.parse_args().src == "from-argv"


def test_get_default():
    parser = ArgumentParser(prog="prog", argument_default="x")
    parser.add_argument("--tags", action="append", default=["a"])
    parser.add_argument("--name")
    parser.add_argument("--flag", action="store_true")
    assert parser.get_default("tags") == ["a"]
    assert parser.get_default("--name") == "x"
    assert parser.get_default("flag") == "false"
    assert parser.get_default("missing") is None


def test_parser_is_reusable():
    parser = ArgumentParser(prog="prog", exit_on_error=False)
    parser.add_argument("--tag", action="append")
    assert parser.parse_args(["--tag", "a"]).tag == ["a"]
    assert parser.parse_args(["--tag", "b"]).tag == ["b"]
    parser.add_argument("--late")
    assert parser.parse_args(["--late", "1"]).late == "1"


def test_str():
    parser = ArgumentParser(prog="prog")
    parser.add_argument("--out", required=True)
    assert str(parser) == (
        "ArgumentParser(prog='prog', positional=0, optional=2, required=1, subcommands=0)"
    )
