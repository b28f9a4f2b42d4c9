"""Target schedule parsing and per-date resolution."""

import re
from collections.abc import Iterable
from datetime import date

from pronto.duration import format_minutes, parse_time
from pronto.errors import InvalidScheduleError
from pronto.models import (
    DurationSession,
    RangeSession,
    ScheduleOverride,
    TargetSchedule,
    TargetSession,
    WeeklyTargets,
)

_CLOCK = r"\d{1,2}:\d{2}"
_RANGE_RE = re.compile(rf"^({_CLOCK})\s*-\s*({_CLOCK})$")
_CLOCK_RE = re.compile(rf"^{_CLOCK}$")
_EMPTY_MARKERS = ("", "-", "off")


def _normalize_clock(text: str) -> str:
    return format_minutes(parse_time(text))


def parse_session(text: str) -> TargetSession:
    """
    Parse one target session.

    '08:00-12:00' is a clock range, '04:30' a duration of 4h30 and '270' a
    duration in minutes.
    """
    text = text.strip()
    if match := _RANGE_RE.match(text):
        start, end = match.groups()
        return RangeSession(_normalize_clock(start), _normalize_clock(end))
    if _CLOCK_RE.match(text):
        return DurationSession(parse_time(text))
    if text.isdigit():
        return DurationSession(int(text))
    msg = f"Invalid target session: {text!r}"
    raise InvalidScheduleError(msg)


def parse_schedule(text: str) -> TargetSchedule:
    """Parse a comma-separated list of sessions. '-' or '' means no target."""
    if text.strip().lower() in _EMPTY_MARKERS:
        return ()
    return tuple(parse_session(part) for part in text.split(","))


def format_schedule(schedule: TargetSchedule) -> str:
    """Inverse of parse_schedule."""
    if not schedule:
        return "-"
    return ", ".join(str(session) for session in schedule)


def resolve_schedule_for_date(
    target_date: date,
    weekly: WeeklyTargets,
    overrides: Iterable[ScheduleOverride] = (),
) -> TargetSchedule:
    """
    Get the target schedule that applies to a date.

    The first override covering the date wins; otherwise the weekly default
    for the date's weekday is used.
    """
    for override in overrides:
        if override.covers(target_date):
            return override.targets.for_weekday(target_date.weekday())
    return weekly.for_weekday(target_date.weekday())
