"""Tests for schedule parsing and resolution."""

from datetime import date

import pytest

from pronto.errors import InvalidScheduleError
from pronto.models import DurationSession, RangeSession, ScheduleOverride, WeeklyTargets
from pronto.schedule import (
    format_schedule,
    parse_schedule,
    parse_session,
    resolve_schedule_for_date,
)


def test_parse_session_variants():
    """Ranges, clock durations and plain minutes."""
    assert parse_session("08:00-12:00") == RangeSession("08:00", "12:00")
    assert parse_session(" 8:00 - 12:30 ") == RangeSession("08:00", "12:30")
    assert parse_session("04:30") == DurationSession(270)
    assert parse_session("480") == DurationSession(480)


@pytest.mark.parametrize("text", ["eight hours", "08:00-", "08-12", "-30"])
def test_parse_session_rejects_garbage(text):
    """Malformed settings text is an error, unlike stamp times."""
    with pytest.raises(InvalidScheduleError):
        parse_session(text)


def test_parse_schedule():
    """Comma separated sessions, '-' for none."""
    assert parse_schedule("08:00-12:00, 13:00-17:00") == (
        RangeSession("08:00", "12:00"),
        RangeSession("13:00", "17:00"),
    )
    assert parse_schedule("-") == ()
    assert parse_schedule("") == ()
    assert parse_schedule("OFF") == ()


def test_format_schedule_inverts_parse():
    """Saved text parses back to the same schedule."""
    for text in ("08:00-12:00, 13:00-17:00", "08:00", "-", "04:00, 09:00-10:00"):
        schedule = parse_schedule(text)
        assert parse_schedule(format_schedule(schedule)) == schedule
    assert format_schedule(()) == "-"
    assert format_schedule((DurationSession(480),)) == "08:00"


def test_weekly_default():
    """Monday to Friday are 8h by default, weekends empty."""
    weekly = WeeklyTargets()
    # 2025-09-01 is a Monday
    assert resolve_schedule_for_date(date(2025, 9, 1), weekly) == (DurationSession(480),)
    # 2025-09-06 is a Saturday
    assert resolve_schedule_for_date(date(2025, 9, 6), weekly) == ()


def test_weekly_targets_need_seven_days():
    """A week has seven schedules."""
    with pytest.raises(ValueError, match="7 days"):
        WeeklyTargets(((),) * 6)


def test_override_wins_inside_its_range():
    """Date-ranged overrides replace the weekly default."""
    weekly = WeeklyTargets()
    semester = ScheduleOverride(
        name="semester",
        start_date=date(2025, 8, 1),
        end_date=date(2025, 12, 15),
        targets=WeeklyTargets().replace_day(
            0, (RangeSession("08:00", "11:00"), RangeSession("14:00", "17:00"))
        ),
    )

    inside = resolve_schedule_for_date(date(2025, 9, 1), weekly, [semester])
    assert inside == (RangeSession("08:00", "11:00"), RangeSession("14:00", "17:00"))

    # Boundaries are inclusive
    assert semester.covers(date(2025, 8, 1))
    assert semester.covers(date(2025, 12, 15))

    outside = resolve_schedule_for_date(date(2026, 1, 5), weekly, [semester])
    assert outside == (DurationSession(480),)


def test_first_matching_override_wins():
    """Overlapping overrides resolve to the first one listed."""
    first = ScheduleOverride(
        "first", date(2025, 1, 1), date(2025, 12, 31), WeeklyTargets(((DurationSession(60),),) * 7)
    )
    second = ScheduleOverride(
        "second", date(2025, 1, 1), date(2025, 12, 31), WeeklyTargets(((DurationSession(90),),) * 7)
    )
    schedule = resolve_schedule_for_date(date(2025, 6, 1), WeeklyTargets(), [first, second])
    assert schedule == (DurationSession(60),)
