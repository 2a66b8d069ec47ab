import logging

import pytest
from rich.logging import RichHandler

from argmatch.utils import get_program_invocation, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_mode_uses_rich(restore_root_logger):
    setup_logging(mode="cli", log_filename=None, console_log_level=logging.INFO)
    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == logging.INFO


def test_json_mode_with_log_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "argmatch.log"
    setup_logging(mode="json", log_filename=str(log_file), json_log_to_file=True)
    kinds = [type(handler) for handler in restore_root_logger.handlers]
    assert kinds == [logging.StreamHandler, logging.FileHandler]
    logging.getLogger("argmatch").debug("hello")
    assert '"message": "hello"' in log_file.read_text(encoding="UTF-8")


def test_mode_from_environment(monkeypatch, restore_root_logger):
    monkeypatch.setenv("ARGMATCH_LOG_MODE", "json")
    setup_logging(log_filename=None)
    assert not isinstance(restore_root_logger.handlers[0], RichHandler)


def test_other_loggers_are_left_alone():
    setup_logging(mode="cli", log_filename=None)
    assert logging.getLogger("markdown_it").level == logging.NOTSET


def test_invalid_mode():
    with pytest.raises(ValueError, match="Invalid log mode: xml"):
        setup_logging(mode="xml", log_filename=None)


def test_get_program_invocation(monkeypatch):
    monkeypatch.setattr("sys.argv", ["/nonexistent/tool.py"])
    monkeypatch.setattr("sys.executable", "/usr/bin/python3")
    assert get_program_invocation() == "python tool.py"
