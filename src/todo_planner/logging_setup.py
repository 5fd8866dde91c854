# src/todo_planner/logging_setup.py

"""
Logging for the task service.

Everything goes through the root logger:
- stderr shows service logs and uvicorn startup/shutdown, but not per-request access lines
- <data_dir>/todo.log keeps everything, HTTP access lines and store tracebacks included
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo.log"

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn configures these itself unless run with log_config=None.
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class _ConsoleNoiseFilter(logging.Filter):
    """Console policy: service + uvicorn lifecycle always, access lines only on WARNING+, others on ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("todo_planner."):
            return True

        if name == "uvicorn.access":
            return record.levelno >= logging.WARNING

        if name == "uvicorn" or name.startswith("uvicorn."):
            return True

        return record.levelno >= logging.ERROR


def _handler(handler: logging.Handler, level: int, fmt: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the console and file handlers on the root logger and return the log file path.

    Safe to call again (e.g. from tests): previous root handlers are replaced.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = _handler(logging.StreamHandler(sys.stderr), console_level, fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)
    root.addHandler(_handler(logging.FileHandler(str(log_file), encoding="utf-8"), file_level, fmt))

    for name in _UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True

    # warnings.warn(...) -> 'py.warnings', which the console shows only on ERROR+
    logging.captureWarnings(True)
    return log_file
