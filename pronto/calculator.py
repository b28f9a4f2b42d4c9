"""Daily time accounting: worked time, balance and predicted clock-out."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from pronto.duration import MINUTES_PER_DAY, Duration
from pronto.models import (
    DailyResult,
    PeriodSummary,
    RangeSession,
    StampEvent,
    StampKind,
    TargetSchedule,
    clamp_minutes,
    total_target,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionWalk:
    """Outcome of pairing a day's entries and exits."""

    worked_minutes: int
    is_open: bool
    last_entry_minute: int | None
    completed_sessions: int


def _walk_order(events: Iterable[StampEvent], rollover: bool) -> list[StampEvent]:
    ordered = sorted(events, key=lambda e: e.minute)
    if not rollover:
        return ordered
    first_entry = next(
        (i for i, event in enumerate(ordered) if event.kind == StampKind.ENTRY), None
    )
    if not first_entry:
        return ordered
    return ordered[first_entry:] + ordered[:first_entry]


def reduce_sessions(events: Iterable[StampEvent], *, rollover: bool = True) -> SessionWalk:
    """
    Pair entries with exits and sum the closed sessions.

    Events are walked in time order (ties keep their given order). With
    ``rollover``, exits earlier than the day's first entry are walked last, as
    the after-midnight end of a shift; without it they are dropped. A new
    entry always replaces an unmatched earlier one, an exit before the matching
    entry is taken to be on the next day, and an exit with no open entry is
    dropped.
    """
    worked = 0
    last_entry: int | None = None
    is_open = False
    completed = 0

    for event in _walk_order(events, rollover):
        minute = event.minute
        if event.kind == StampKind.ENTRY:
            if is_open:
                logger.debug("Entry at %s supersedes open entry at %s", event.time, last_entry)
            last_entry = minute
            is_open = True
        elif is_open and last_entry is not None:
            exit_minute = minute
            # Shift crossed midnight
            if exit_minute < last_entry:
                exit_minute += MINUTES_PER_DAY
            worked += exit_minute - last_entry
            is_open = False
            completed += 1
        else:
            logger.debug("Exit at %s without open entry ignored", event.time)

    return SessionWalk(
        worked_minutes=worked,
        is_open=is_open,
        last_entry_minute=last_entry,
        completed_sessions=completed,
    )


def live_session_minutes(walk: SessionWalk, now_minute: int) -> int:
    """Minutes elapsed in the open session up to ``now_minute``."""
    if not walk.is_open or walk.last_entry_minute is None:
        return 0
    return max(0, now_minute - walk.last_entry_minute)


def calculate_balance(worked_minutes: int, target_minutes: int, tolerance: int) -> int:
    """Worked minutes minus the target reduced by the tolerance (never below zero)."""
    effective_target = max(0, target_minutes - tolerance)
    return worked_minutes - effective_target


def predict_exit(walk: SessionWalk, schedule: TargetSchedule) -> int | None:
    """
    Predict the clock-out minute of the open session.

    The session is expected to last as long as the configured shift it falls
    into, counted from the actual clock-in rather than the shift's nominal
    start. Without a matching shift the remaining target is added to the
    clock-in instead. Returns None when closed or the target is already met.
    The result may exceed 1440 when the clock-out is past midnight.
    """
    if not walk.is_open or walk.last_entry_minute is None:
        return None

    clock_in = walk.last_entry_minute
    remaining = max(0, total_target(schedule) - walk.worked_minutes)
    if remaining == 0:
        return None

    ranges = sorted(
        (session for session in schedule if isinstance(session, RangeSession)),
        key=lambda session: session.start_minute,
    )
    for shift in ranges:
        if shift.end_minute > clock_in:
            return clock_in + shift.duration

    return clock_in + remaining


def compute_daily_stats(
    entries: Iterable[StampEvent],
    schedule: TargetSchedule,
    tolerance: int = 0,
    is_today: bool = False,
    *,
    now_minute: int | None = None,
    tz: tzinfo | None = None,
) -> DailyResult:
    """
    Compute worked time, balance and predicted clock-out for one day.

    Args:
        entries: The day's stamps, in any order.
        schedule: The target sessions that apply to the day.
        tolerance: Grace minutes subtracted from the target.
        is_today: Credit an open session with the time elapsed so far, and do
            not pair exits before the first entry across midnight.
        now_minute: Current minute of the day; sampled from the clock in
            ``tz`` when omitted.
    """
    tolerance = clamp_minutes(tolerance, "tolerance")
    schedule = tuple(schedule)
    # Today's after-midnight exits have not happened yet
    walk = reduce_sessions(entries, rollover=not is_today)

    worked = walk.worked_minutes
    if is_today and walk.is_open:
        if now_minute is None:
            now_minute = Duration.now(tz).minutes
        worked += live_session_minutes(walk, now_minute)

    target = total_target(schedule)
    return DailyResult(
        worked_minutes=worked,
        balance_minutes=calculate_balance(worked, target, tolerance),
        predicted_exit_minute=predict_exit(walk, schedule),
        is_session_open=walk.is_open,
        total_target_minutes=target,
        completed_sessions=walk.completed_sessions,
    )


def summarize_period(
    days: Mapping[date, Iterable[StampEvent]],
    resolve: Callable[[date], TargetSchedule],
    tolerance: int = 0,
    today: date | None = None,
    *,
    now_minute: int | None = None,
    tz: tzinfo | None = None,
) -> PeriodSummary:
    """
    Evaluate several days and keep a cumulative balance.

    Dates after ``today`` are skipped. ``resolve`` maps each date to its
    target schedule.
    """
    if today is None or now_minute is None:
        # One clock reading for both the date and the minute
        current = datetime.now(tz)
        today = today or current.date()
        if now_minute is None and today in days:
            now_minute = current.hour * 60 + current.minute

    results: dict[date, DailyResult] = {}
    daily_balances: dict[date, int] = {}
    running_balance = 0

    for target_date in sorted(days):
        if target_date > today:
            continue
        result = compute_daily_stats(
            days[target_date],
            resolve(target_date),
            tolerance,
            is_today=target_date == today,
            now_minute=now_minute,
        )
        running_balance += result.balance_minutes
        results[target_date] = result
        daily_balances[target_date] = running_balance

    return PeriodSummary(days=results, daily_balances=daily_balances)
