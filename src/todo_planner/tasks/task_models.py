# src/todo_planner/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Task:
    """
    A task record.

    Notes:
    - id is None until the store assigns one.
    - date/comment/repeat are None when not provided; the empty string is
      treated the same way everywhere a decision depends on it.
    """

    title: str
    date: str | None = None
    comment: str | None = None
    repeat: str | None = None
    id: int | None = None

    @property
    def is_recurring(self) -> bool:
        return bool(self.repeat and self.repeat.strip())
