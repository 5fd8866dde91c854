# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_planner.api.server import create_app
from todo_planner.config import Settings
from todo_planner.recurrence.rules import DefaultRecurrenceEngine
from todo_planner.tasks.task_service import TaskService
from todo_planner.tasks.task_store import TaskStore

from .fakes import fixed_clock


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test data dir.

    Built directly rather than from the environment, to keep unit tests
    isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return Settings(
        app_name="todo-planner-test",
        log_level="DEBUG",
        host="127.0.0.1",
        port=0,
        web_dir=None,
        data_dir=data_dir,
        db_file=data_dir / "scheduler.db",
        list_limit=50,
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "scheduler.db")


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    """
    TaskService wired with the real SQLite store and rule engine, but a fixed clock.
    """
    return TaskService(store, DefaultRecurrenceEngine(), clock=fixed_clock)


@pytest.fixture()
def client(service: TaskService) -> TestClient:
    return TestClient(create_app(service))
