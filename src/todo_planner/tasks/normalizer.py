# src/todo_planner/tasks/normalizer.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.errors import InvalidDateError, InvalidRepeatRuleError
from ..core.ports import RecurrenceEngine
from ..recurrence.rules import format_day, parse_day
from .task_models import Task

logger = logging.getLogger(__name__)


def normalize_date(task: Task, now: datetime, engine: RecurrenceEngine) -> str:
    """
    Decide the date a candidate task is stored with.

    - no date            -> today
    - date not lapsed    -> unchanged, even for recurring tasks
    - lapsed, one-off    -> today
    - lapsed, recurring  -> engine.next_date(now, date, repeat)

    A non-empty repeat rule is validated in every case so that rejected
    rules never reach the store.
    """
    today = format_day(now.date())
    rule = (task.repeat or "").strip()

    if rule:
        try:
            engine.validate(rule)
        except ValueError as e:
            raise InvalidRepeatRuleError(f"invalid repeat rule: {rule}") from e

    raw = (task.date or "").strip()
    if not raw:
        return today

    try:
        day = parse_day(raw)
    except ValueError as e:
        raise InvalidDateError(f"invalid date format: {raw}") from e

    if not engine.is_before(now, day):
        return raw

    if not rule:
        logger.debug("Lapsed one-off date %s collapsed to %s", raw, today)
        return today

    try:
        advanced = engine.next_date(now, raw, rule)
    except ValueError as e:
        raise InvalidRepeatRuleError(f"invalid repeat rule: {rule}") from e

    logger.debug("Lapsed date %s advanced to %s by rule %r", raw, advanced, rule)
    return advanced
