# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from todo_planner.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_file_log_keeps_everything(tmp_path: Path, restore_root_logging: None) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("todo_planner.tasks").debug("task debug line")
    logging.getLogger("uvicorn.access").info("GET /api/tasks 200")
    for h in logging.getLogger().handlers:
        h.flush()

    text = log_file.read_text("utf-8")
    assert log_file == tmp_path / "logs" / "todo.log"
    assert "task debug line" in text
    assert "GET /api/tasks 200" in text
    assert not logging.getLogger("uvicorn.access").handlers


def test_console_drops_access_lines(tmp_path: Path, restore_root_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(log_dir=tmp_path)

    logging.getLogger("todo_planner.api").info("service line")
    logging.getLogger("uvicorn.access").info("GET /api/tasks 200")
    logging.getLogger("some.library").warning("library chatter")

    err = capsys.readouterr().err
    assert "service line" in err
    assert "GET /api/tasks" not in err
    assert "library chatter" not in err
