# tests/test_recurrence_rules.py

from __future__ import annotations

from datetime import date

import pytest

from todo_planner.recurrence.rules import RepeatRuleError, is_before, next_date, parse_day, parse_rule

from .fakes import NOW


def test_is_before_uses_calendar_day_only() -> None:
    assert is_before(NOW, date(2024, 1, 14))
    assert not is_before(NOW, date(2024, 1, 15))
    assert not is_before(NOW, date(2024, 1, 16))


@pytest.mark.parametrize(
    ("day", "rule", "expected"),
    [
        ("20240101", "d 1", "20240116"),
        ("20240113", "d 7", "20240120"),
        ("20240115", "d 3", "20240118"),
        ("20240120", "d 7", "20240127"),
        ("20231111", "d 400", "20241215"),
    ],
)
def test_daily_rule_moves_past_today(day: str, rule: str, expected: str) -> None:
    assert next_date(NOW, day, rule) == expected


def test_yearly_rule() -> None:
    assert next_date(NOW, "20230220", "y") == "20240220"
    assert next_date(NOW, "20240116", "y") == "20250116"
    # Feb 29 rolls to Mar 1 in non-leap years and stays there.
    assert next_date(NOW, "20200229", "y") == "20240301"


def test_weekly_rule() -> None:
    # NOW is a Monday.
    assert next_date(NOW, "20240101", "w 1") == "20240122"
    assert next_date(NOW, "20240101", "w 3,5") == "20240117"
    assert next_date(NOW, "20240201", "w 7") == "20240204"


def test_monthly_rule() -> None:
    assert next_date(NOW, "20240101", "m 1") == "20240201"
    assert next_date(NOW, "20240101", "m -1") == "20240131"
    assert next_date(NOW, "20240101", "m -2") == "20240130"
    assert next_date(NOW, "20240101", "m 29 2") == "20240229"
    assert next_date(NOW, "20240101", "m 1 3,6") == "20240301"


@pytest.mark.parametrize(
    "rule",
    ["", "x", "d", "d 0", "d 401", "d x", "d 1 2", "y 1", "w", "w 0", "w 8", "w 1,x", "m", "m 32", "m -3", "m 1 13"],
)
def test_invalid_rules_are_rejected(rule: str) -> None:
    with pytest.raises(RepeatRuleError):
        parse_rule(rule)
    with pytest.raises(ValueError):
        next_date(NOW, "20240101", rule)


def test_unsatisfiable_monthly_rule() -> None:
    parse_rule("m 31 2")
    with pytest.raises(RepeatRuleError):
        next_date(NOW, "20240101", "m 31 2")


@pytest.mark.parametrize("raw", ["", "2024-01-01", "2024011", "20241301", "20240230", "abcdefgh"])
def test_parse_day_rejects_malformed(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_day(raw)
