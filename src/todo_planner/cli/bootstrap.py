# src/todo_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite store and the recurrence engine into the task service,
- builds the HTTP application.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..api.server import create_app
from ..config import Settings, get_settings
from ..core.state import AppState
from ..recurrence.rules import DefaultRecurrenceEngine
from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_file.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.db_file)
    service = TaskService(
        store,
        DefaultRecurrenceEngine(),
        list_limit=settings.list_limit,
    )
    return AppState(settings=settings, task_store=store, service=service)


def build_app(state: AppState) -> FastAPI:
    return create_app(
        state.service,
        web_dir=state.settings.web_dir,
        title=state.settings.app_name,
    )
