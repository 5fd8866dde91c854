# src/todo_planner/recurrence/rules.py

"""
Repeat-rule engine.

Supported rules:
- "d N"                  every N days (1 <= N <= 400)
- "y"                    every year on the same day (Feb 29 rolls to Mar 1)
- "w 1,3,7"              on the listed weekdays (1 = Monday ... 7 = Sunday)
- "m 1,15,-1 [1,6,12]"   on the listed days of month (-1 = last, -2 = penultimate),
                         optionally restricted to the listed months

next_date() always moves forward: the result is strictly after today and
strictly after the stored date.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y%m%d"

MAX_DAY_INTERVAL = 400

# Calendar scans (weekly/monthly rules) give up after this many days.
# Nine years covers the 2096 -> 2104 gap without a Feb 29.
_SCAN_LIMIT_DAYS = 366 * 9

_MONTH_DAY_VALUES = frozenset(range(1, 32)) | {-1, -2}


class RepeatRuleError(ValueError):
    """Repeat rule is malformed or can never produce a date."""


@dataclass(frozen=True, slots=True)
class RepeatRule:
    kind: str
    interval: int = 0
    weekdays: frozenset[int] = frozenset()
    month_days: frozenset[int] = frozenset()
    months: frozenset[int] = frozenset()


def parse_day(raw: str) -> date:
    """Parse a YYYYMMDD string. Raises ValueError."""
    if len(raw) != 8 or not raw.isdigit():
        raise ValueError(f"invalid date format: {raw}")
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"invalid date format: {raw}") from None


def format_day(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def _parse_int(raw: str, rule: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise RepeatRuleError(f"invalid repeat rule: {rule}") from None


def _parse_values(raw: str, rule: str, allowed: frozenset[int]) -> frozenset[int]:
    values: set[int] = set()
    for item in raw.split(","):
        n = _parse_int(item.strip(), rule)
        if n not in allowed:
            raise RepeatRuleError(f"invalid repeat rule: {rule}")
        values.add(n)
    return frozenset(values)


def parse_rule(rule: str) -> RepeatRule:
    parts = rule.split()
    if not parts:
        raise RepeatRuleError("empty repeat rule")

    kind, args = parts[0], parts[1:]

    if kind == "d":
        if len(args) != 1:
            raise RepeatRuleError(f"invalid repeat rule: {rule}")
        n = _parse_int(args[0], rule)
        if not 1 <= n <= MAX_DAY_INTERVAL:
            raise RepeatRuleError(f"day interval out of range: {rule}")
        return RepeatRule(kind="d", interval=n)

    if kind == "y":
        if args:
            raise RepeatRuleError(f"invalid repeat rule: {rule}")
        return RepeatRule(kind="y")

    if kind == "w":
        if len(args) != 1:
            raise RepeatRuleError(f"invalid repeat rule: {rule}")
        return RepeatRule(kind="w", weekdays=_parse_values(args[0], rule, frozenset(range(1, 8))))

    if kind == "m":
        if len(args) not in (1, 2):
            raise RepeatRuleError(f"invalid repeat rule: {rule}")
        month_days = _parse_values(args[0], rule, _MONTH_DAY_VALUES)
        months = _parse_values(args[1], rule, frozenset(range(1, 13))) if len(args) == 2 else frozenset()
        return RepeatRule(kind="m", month_days=month_days, months=months)

    raise RepeatRuleError(f"unsupported repeat rule: {rule}")


def is_before(now: datetime, day: date) -> bool:
    return day < now.date()


def _add_year(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # Feb 29 in a non-leap target year
        return date(day.year + 1, 3, 1)


def _matches_month_day(rule: RepeatRule, day: date) -> bool:
    if rule.months and day.month not in rule.months:
        return False
    if day.day in rule.month_days:
        return True
    last = calendar.monthrange(day.year, day.month)[1]
    if -1 in rule.month_days and day.day == last:
        return True
    return -2 in rule.month_days and day.day == last - 1


def _scan(rule: RepeatRule, after: date, raw_rule: str) -> date:
    current = after
    for _ in range(_SCAN_LIMIT_DAYS):
        current += timedelta(days=1)
        if rule.kind == "w" and current.isoweekday() in rule.weekdays:
            return current
        if rule.kind == "m" and _matches_month_day(rule, current):
            return current
    raise RepeatRuleError(f"repeat rule never matches a date: {raw_rule}")


def next_date(now: datetime, day: str, rule: str) -> str:
    """
    Next occurrence of `rule` for a task stored at `day`.

    Raises RepeatRuleError for bad rules and ValueError for a bad `day`.
    """
    parsed = parse_rule(rule)
    start = parse_day(day)
    today = now.date()

    if parsed.kind == "d":
        steps = max(1, (today - start).days // parsed.interval + 1)
        return format_day(start + timedelta(days=steps * parsed.interval))

    if parsed.kind == "y":
        current = _add_year(start)
        while current <= today:
            current = _add_year(current)
        return format_day(current)

    return format_day(_scan(parsed, max(start, today), rule))


class DefaultRecurrenceEngine:
    """RecurrenceEngine port backed by the module-level rule functions."""

    def is_before(self, now: datetime, day: date) -> bool:
        return is_before(now, day)

    def next_date(self, now: datetime, day: str, rule: str) -> str:
        return next_date(now, day, rule)

    def validate(self, rule: str) -> None:
        parse_rule(rule)
