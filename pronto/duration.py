"""Time-of-day codec and duration arithmetic."""

from datetime import datetime, tzinfo

MINUTES_PER_DAY = 24 * 60


def _to_int(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0


def parse_time(value: str | None) -> int:
    """
    Parse a wall-clock string like '09:30' into a minute count.

    Malformed input decodes to 0 instead of raising, so an empty or garbled
    time is indistinguishable from midnight.
    """
    if not value or ":" not in value:
        return 0
    hours, _, minutes = value.strip().partition(":")
    return 60 * _to_int(hours.strip()) + _to_int(minutes.strip())


def format_minutes(minutes: int) -> str:
    """Format minutes as HH:MM with a sign prefix; no wrapping at midnight."""
    sign = "-" if minutes < 0 else ""
    abs_minutes = abs(minutes)
    return f"{sign}{abs_minutes // 60:02}:{abs_minutes % 60:02}"


class Duration:
    """A signed minute count shown as HH:MM."""

    @classmethod
    def now(cls, tz: tzinfo | None = None) -> "Duration":
        """Get the current minute of the day in the given timezone."""
        current = datetime.now(tz)
        return cls(current.hour * 60 + current.minute)

    def __init__(self, minutes: int = 0) -> None:
        self.minutes: int = minutes

    def __repr__(self) -> str:
        return format_minutes(self.minutes)

    __str__ = __repr__

    def wrapped(self) -> "Duration":
        """Wrap onto a 24-hour clock face (e.g. 25:10 -> 01:10)."""
        return Duration(self.minutes % MINUTES_PER_DAY)
