# src/todo_planner/core/ports.py

"""
Ports (interfaces) used by the lifecycle service.

The service depends on Protocols instead of concrete implementations.
This keeps storage and the recurrence engine swappable and makes testing easier.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Persistence of task records. Unknown ids raise TaskNotFoundError."""

    def add_task(self, task: Task) -> int: ...
    def get_task(self, task_id: int) -> Task: ...
    def update_task(self, task: Task) -> None: ...
    def update_date(self, task_id: int, new_date: str) -> None: ...
    def delete_task(self, task_id: int) -> None: ...
    def list_tasks(self, limit: int, search: str | None = None) -> list[Task]: ...


class RecurrenceEngine(Protocol):
    """
    Calendar arithmetic for repeat rules.

    - is_before: True iff `day` is strictly earlier than now's calendar date
    - next_date: next occurrence after now for the stored date and rule
      (raises ValueError for rules it rejects)
    - validate: raises ValueError if the rule is not syntactically valid
    """

    def is_before(self, now: datetime, day: date) -> bool: ...
    def next_date(self, now: datetime, day: str, rule: str) -> str: ...
    def validate(self, rule: str) -> None: ...
