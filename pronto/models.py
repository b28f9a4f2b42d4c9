"""Data models for stamps, target schedules and computed statistics."""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal, TypeAlias

from pronto.duration import MINUTES_PER_DAY, Duration, format_minutes, parse_time

logger = logging.getLogger(__name__)


def clamp_minutes(value: object, what: str = "minutes") -> int:
    """Coerce a minute count to a non-negative int, 0 when not numeric."""
    try:
        minutes = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        logger.warning("Non-numeric %s %r treated as 0", what, value)
        return 0
    if minutes < 0:
        logger.warning("Negative %s %d clamped to 0", what, minutes)
        return 0
    return minutes


class StampKind(str, Enum):
    """Kind of clock action."""

    ENTRY = "entry"
    EXIT = "exit"


@dataclass(frozen=True)
class StampEvent:
    """A single clock-in or clock-out action."""

    id: str
    time: str
    kind: StampKind
    label: str = ""
    photo: str | None = None

    @property
    def minute(self) -> int:
        """Minute of the day of this stamp."""
        return parse_time(self.time)


@dataclass(frozen=True)
class DurationSession:
    """A required session of fixed length with no fixed clock position."""

    minutes: int
    kind: Literal["duration"] = field(default="duration", init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "minutes", clamp_minutes(self.minutes, "target minutes"))

    @property
    def duration(self) -> int:
        return self.minutes

    def __str__(self) -> str:
        return format_minutes(self.minutes)


@dataclass(frozen=True)
class RangeSession:
    """A required session bound to a clock window. Overnight ranges count as zero."""

    start: str
    end: str
    kind: Literal["range"] = field(default="range", init=False)

    @property
    def start_minute(self) -> int:
        return parse_time(self.start)

    @property
    def end_minute(self) -> int:
        return parse_time(self.end)

    @property
    def duration(self) -> int:
        return max(0, self.end_minute - self.start_minute)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


TargetSession: TypeAlias = DurationSession | RangeSession
TargetSchedule: TypeAlias = tuple[TargetSession, ...]


def total_target(schedule: TargetSchedule) -> int:
    """Sum of the durations of every session in a schedule."""
    return sum(session.duration for session in schedule)


WEEKDAY_KEYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


def _default_weekly() -> tuple[TargetSchedule, ...]:
    working_day: TargetSchedule = (DurationSession(8 * 60),)
    return (working_day,) * 5 + ((), ())


@dataclass(frozen=True)
class WeeklyTargets:
    """Target schedules indexed by ``date.weekday()`` (Monday = 0)."""

    days: tuple[TargetSchedule, ...] = field(default_factory=_default_weekly)

    def __post_init__(self) -> None:
        if len(self.days) != len(WEEKDAY_KEYS):
            msg = f"Weekly targets need {len(WEEKDAY_KEYS)} days, got {len(self.days)}"
            raise ValueError(msg)

    def for_weekday(self, weekday: int) -> TargetSchedule:
        return self.days[weekday]

    def replace_day(self, weekday: int, schedule: TargetSchedule) -> "WeeklyTargets":
        """Return a copy with one weekday's schedule replaced."""
        days = list(self.days)
        days[weekday] = tuple(schedule)
        return WeeklyTargets(tuple(days))


@dataclass(frozen=True)
class ScheduleOverride:
    """Weekly targets that replace the default between two dates (inclusive)."""

    name: str
    start_date: date
    end_date: date
    targets: WeeklyTargets

    def covers(self, target_date: date) -> bool:
        return self.start_date <= target_date <= self.end_date


@dataclass(frozen=True)
class DailyResult:
    """Statistics computed for one day."""

    worked_minutes: int
    balance_minutes: int
    predicted_exit_minute: int | None
    is_session_open: bool
    total_target_minutes: int
    completed_sessions: int = 0

    @property
    def worked(self) -> str:
        return format_minutes(self.worked_minutes)

    @property
    def balance(self) -> str:
        return format_minutes(self.balance_minutes)

    @property
    def target(self) -> str:
        return format_minutes(self.total_target_minutes)

    @property
    def predicted_exit(self) -> str | None:
        """Predicted clock-out on a 24-hour clock face, or None."""
        if self.predicted_exit_minute is None:
            return None
        return str(Duration(self.predicted_exit_minute).wrapped())

    @property
    def crosses_midnight(self) -> bool:
        """Whether the predicted clock-out falls on the next day."""
        return (
            self.predicted_exit_minute is not None
            and self.predicted_exit_minute >= MINUTES_PER_DAY
        )


@dataclass
class PeriodSummary:
    """Daily results over a range of dates with a running balance."""

    days: dict[date, DailyResult]
    daily_balances: dict[date, int]

    @property
    def balance_minutes(self) -> int:
        """Cumulative balance at the last evaluated date."""
        if not self.daily_balances:
            return 0
        return self.daily_balances[max(self.daily_balances)]

    @property
    def worked_minutes(self) -> int:
        return sum(result.worked_minutes for result in self.days.values())

    @property
    def target_minutes(self) -> int:
        return sum(result.total_target_minutes for result in self.days.values())
