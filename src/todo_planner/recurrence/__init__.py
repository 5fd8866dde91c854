# src/todo_planner/recurrence/__init__.py

from .rules import (
    DATE_FORMAT,
    DefaultRecurrenceEngine,
    RepeatRuleError,
    format_day,
    is_before,
    next_date,
    parse_day,
    parse_rule,
)

__all__ = [
    "DATE_FORMAT",
    "DefaultRecurrenceEngine",
    "RepeatRuleError",
    "format_day",
    "is_before",
    "next_date",
    "parse_day",
    "parse_rule",
]
