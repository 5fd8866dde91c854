# src/todo_planner/api/schemas.py

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..core.errors import TaskNotFoundError
from ..tasks.task_models import Task

# SQLite INTEGER PRIMARY KEY range (rowids start at 1).
MAX_TASK_ID = 2**63 - 1


def parse_task_id(raw: int | str | None) -> int | None:
    """
    Wire ids are decimal strings (numbers are accepted too).

    Missing/blank -> None. Anything that cannot be a stored id (not a number,
    or outside the rowid range) is reported as an unknown task.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        task_id = raw
    else:
        text = raw.strip()
        if not text:
            return None
        if not text.isdigit():
            raise TaskNotFoundError(text)
        task_id = int(text)
    if not 1 <= task_id <= MAX_TASK_ID:
        raise TaskNotFoundError(task_id)
    return task_id


class TaskPayload(BaseModel):
    """Inbound task body for create (POST) and update (PUT)."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    date: str | None = None
    title: str | None = None
    comment: str | None = None
    repeat: str | None = None

    def to_task(self, *, with_id: bool = True) -> Task:
        """Create bodies pass with_id=False: the store assigns ids, so a client id is ignored."""
        return Task(
            id=parse_task_id(self.id) if with_id else None,
            date=self.date or None,
            title=self.title or "",
            comment=self.comment or None,
            repeat=self.repeat or None,
        )


class TaskOut(BaseModel):
    id: str
    date: str
    title: str
    comment: str = ""
    repeat: str = ""

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=str(task.id),
            date=task.date or "",
            title=task.title,
            comment=task.comment or "",
            repeat=task.repeat or "",
        )
