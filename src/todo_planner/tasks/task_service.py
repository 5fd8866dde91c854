# src/todo_planner/tasks/task_service.py

"""
Task lifecycle.

Draft -> Persisted -> (Updated)* -> Completed-and-advanced | Deleted

Every operation performs at most one store mutation; a recurring task's
completion is the only one that reads before it writes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from ..core.errors import InvalidDateError, InvalidRepeatRuleError, ValidationError
from ..core.ports import RecurrenceEngine, TaskRepo
from ..recurrence.rules import parse_day
from .normalizer import normalize_date
from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50


class TaskService:
    def __init__(
        self,
        repo: TaskRepo,
        engine: RecurrenceEngine,
        *,
        clock: Callable[[], datetime] = datetime.now,
        list_limit: int = DEFAULT_LIST_LIMIT,
    ) -> None:
        self._repo = repo
        self._engine = engine
        self._clock = clock
        self._list_limit = max(1, int(list_limit))

    @property
    def list_limit(self) -> int:
        return self._list_limit

    # ---- helpers ----

    @staticmethod
    def _require_title(candidate: Task) -> None:
        if not candidate.title:
            raise ValidationError("title required")

    def _normalized(self, candidate: Task) -> Task:
        day = normalize_date(candidate, self._clock(), self._engine)
        # The rule is stored as submitted; only a blank one means "no repeat".
        repeat = candidate.repeat if candidate.is_recurring else None
        return replace(candidate, date=day, repeat=repeat, comment=candidate.comment or None)

    # ---- lifecycle ----

    def create(self, candidate: Task) -> int:
        self._require_title(candidate)
        task = self._normalized(replace(candidate, id=None))
        task_id = self._repo.add_task(task)
        logger.info("Task created id=%s date=%s repeat=%r", task_id, task.date, task.repeat)
        return task_id

    def read(self, task_id: int) -> Task:
        task = self._repo.get_task(task_id)
        logger.debug("Task read id=%s", task_id)
        return task

    def update(self, candidate: Task) -> None:
        if candidate.id is None:
            raise ValidationError("id required")
        self._require_title(candidate)
        task = self._normalized(candidate)
        self._repo.update_task(task)
        logger.info("Task updated id=%s date=%s repeat=%r", task.id, task.date, task.repeat)

    def list_tasks(self, limit: int | None = None, search: str | None = None) -> list[Task]:
        effective = self._list_limit
        if limit is not None and 0 < limit < effective:
            effective = limit
        tasks = self._repo.list_tasks(effective, search=search)
        return list(tasks or [])[:effective]

    def complete(self, task_id: int) -> Task | None:
        """
        Mark a task done.

        One-off tasks are deleted (returns None). Recurring tasks are moved to
        their next occurrence and the advanced task is returned.
        """
        task = self._repo.get_task(task_id)

        if not task.is_recurring:
            self._repo.delete_task(task_id)
            logger.info("Task completed and removed id=%s", task_id)
            return None

        rule = (task.repeat or "").strip()
        try:
            next_day = self._engine.next_date(self._clock(), task.date or "", rule)
        except ValueError as e:
            raise InvalidRepeatRuleError(f"invalid repeat rule: {rule}") from e

        self._repo.update_date(task_id, next_day)
        logger.info("Task completed id=%s next date=%s", task_id, next_day)
        return replace(task, date=next_day)

    def delete(self, task_id: int) -> None:
        self._repo.delete_task(task_id)
        logger.info("Task deleted id=%s", task_id)

    def next_date(self, now: str | None, day: str, repeat: str) -> str:
        """Preview the next occurrence of `repeat` for a task stored at `day`."""
        if now and now.strip():
            try:
                moment = datetime.combine(parse_day(now.strip()), datetime.min.time())
            except ValueError as e:
                raise InvalidDateError(f"invalid date format: {now}") from e
        else:
            moment = self._clock()

        try:
            parse_day(day)
        except ValueError as e:
            raise InvalidDateError(f"invalid date format: {day}") from e

        try:
            return self._engine.next_date(moment, day, repeat)
        except ValueError as e:
            raise InvalidRepeatRuleError(f"invalid repeat rule: {repeat}") from e
