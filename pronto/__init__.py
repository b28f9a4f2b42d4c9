"""Work hours tracking: worked time, balance and predicted clock-out."""

from pronto.calculator import compute_daily_stats, summarize_period
from pronto.duration import format_minutes, parse_time
from pronto.models import DailyResult, DurationSession, RangeSession, StampEvent, StampKind

__all__ = [
    "DailyResult",
    "DurationSession",
    "RangeSession",
    "StampEvent",
    "StampKind",
    "compute_daily_stats",
    "format_minutes",
    "parse_time",
    "summarize_period",
]
