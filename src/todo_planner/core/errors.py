# src/todo_planner/core/errors.py

"""
Domain errors raised by the task lifecycle.

Every error carries a `kind` so the request surface can translate it into the
uniform `{"error": ...}` response without inspecting class names.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    INVALID_DATE = "invalid_date"
    INVALID_REPEAT_RULE = "invalid_repeat_rule"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class TaskError(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """A required field is missing or empty."""

    kind = ErrorKind.VALIDATION


class InvalidDateError(TaskError):
    kind = ErrorKind.INVALID_DATE


class InvalidRepeatRuleError(TaskError):
    kind = ErrorKind.INVALID_REPEAT_RULE


class TaskNotFoundError(TaskError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, task_id: object) -> None:
        super().__init__("task not found")
        self.task_id = task_id


class StorageError(TaskError):
    kind = ErrorKind.STORAGE
