import json
import logging

import pytest

from argmatch.__main__ import console_log_level, get_parser, main

DECLARATION = """
prog: copy
arguments:
  - flags: [files]
    nargs: "+"
  - flags: [-o, --out]
    required: true
  - flags: [-v, --verbose]
    action: count
"""


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the root logger untouched while the CLI runs."""
    calls = []
    monkeypatch.setattr(
        "argmatch.__main__.setup_logging", lambda **kwargs: calls.append(kwargs)
    )
    return calls


@pytest.fixture
def declaration(tmp_path):
    path = tmp_path / "copy.yaml"
    path.write_text(DECLARATION, encoding="UTF-8")
    return str(path)


def test_get_parser():
    parser = get_parser()
    assert parser.prog == "argmatch"
    args = parser.parse_args(["-vv", "decl.yaml", "--", "--out", "x"])
    assert args.declaration == "decl.yaml"
    assert args.tokens == ["--out", "x"]
    assert args.verbose == 2
    assert args.json is False


@pytest.mark.parametrize(
    "verbosity, level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_console_log_level(verbosity, level):
    assert console_log_level(verbosity) == level


def test_main_prints_bindings(declaration, capsys, no_logging_setup):
    code = main([declaration, "--", "-o", "result.txt", "a.txt", "-vv"])
    assert code == 0
    output = capsys.readouterr().out
    assert "result.txt" in output
    assert "[a.txt]" in output
    assert no_logging_setup == [
        {"log_filename": None, "console_log_level": logging.WARNING}
    ]


def test_main_prints_json(declaration, capsys):
    code = main(["--json", declaration, "--", "-o", "result.txt", "a.txt", "b.txt"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"files": ["a.txt", "b.txt"], "out": "result.txt", "verbose": 0}


def test_main_reports_match_errors(declaration, capsys):
    code = main([declaration, "--", "a.txt"])
    assert code == 1
    error = capsys.readouterr().err
    assert "usage: copy" in error
    assert "copy: error: the following arguments are required: -o/--out" in error


def test_main_renders_declared_help(declaration, capsys):
    assert main([declaration, "--", "--help"]) == 0
    assert "usage: copy" in capsys.readouterr().out


def test_main_missing_declaration(tmp_path, capsys):
    assert main([str(tmp_path / "missing.yaml")]) == 1
    assert "No such declaration file" in capsys.readouterr().err


def test_main_invalid_declaration(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("arguments:\n  - flags: [--x]\n    nargs: 0\n", encoding="UTF-8")
    assert main([str(path)]) == 1
    assert "argmatch: error:" in capsys.readouterr().err


def test_main_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert "argmatch" in capsys.readouterr().out
