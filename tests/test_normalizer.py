# tests/test_normalizer.py

from __future__ import annotations

import pytest

from todo_planner.core.errors import InvalidDateError, InvalidRepeatRuleError
from todo_planner.recurrence.rules import DefaultRecurrenceEngine
from todo_planner.tasks.normalizer import normalize_date
from todo_planner.tasks.task_models import Task

from .fakes import NOW, FakeRecurrenceEngine


def test_missing_date_becomes_today() -> None:
    engine = FakeRecurrenceEngine()
    assert normalize_date(Task(title="Pay rent"), NOW, engine) == "20240115"
    assert normalize_date(Task(title="Pay rent", date="  "), NOW, engine) == "20240115"
    assert engine.calls == []


@pytest.mark.parametrize("day", ["20200101", "20240114"])
def test_lapsed_one_off_collapses_to_today(day: str) -> None:
    engine = FakeRecurrenceEngine()
    assert normalize_date(Task(title="t", date=day), NOW, engine) == "20240115"
    assert engine.calls == []


@pytest.mark.parametrize("day", ["20240115", "20240116", "20300101"])
def test_current_or_future_dates_are_kept(day: str) -> None:
    engine = FakeRecurrenceEngine()
    assert normalize_date(Task(title="t", date=day), NOW, engine) == day
    assert normalize_date(Task(title="t", date=day, repeat="d 1"), NOW, engine) == day
    assert engine.calls == []


def test_lapsed_recurring_date_is_advanced_by_engine() -> None:
    engine = FakeRecurrenceEngine(next_result="20240120")
    task = Task(title="Standup", date="20240101", repeat="d 1")

    assert normalize_date(task, NOW, engine) == "20240120"
    assert engine.calls == [(NOW, "20240101", "d 1")]


def test_lapsed_recurring_date_with_real_engine() -> None:
    task = Task(title="Standup", date="20240101", repeat="d 1")
    assert normalize_date(task, NOW, DefaultRecurrenceEngine()) == "20240116"


@pytest.mark.parametrize("day", ["2024-01-01", "15.01.2024", "20241340", "tomorrow"])
def test_unparseable_date(day: str) -> None:
    with pytest.raises(InvalidDateError):
        normalize_date(Task(title="t", date=day), NOW, FakeRecurrenceEngine())


def test_rejected_rule_fails_for_lapsed_date() -> None:
    engine = FakeRecurrenceEngine(rejected={"q 1"})
    with pytest.raises(InvalidRepeatRuleError):
        normalize_date(Task(title="t", date="20240101", repeat="q 1"), NOW, engine)


def test_rejected_rule_fails_even_when_date_is_not_lapsed() -> None:
    engine = FakeRecurrenceEngine(rejected={"q 1"})
    with pytest.raises(InvalidRepeatRuleError):
        normalize_date(Task(title="t", date="20240301", repeat="q 1"), NOW, engine)
