"""Main entry point for pronto."""

import argparse
import logging
import sys
from datetime import date, datetime
from zoneinfo import ZoneInfoNotFoundError

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from pronto.calculator import compute_daily_stats
from pronto.config import Settings, config_path, load_settings
from pronto.duration import parse_time
from pronto.errors import InvalidStampError, ProntoError
from pronto.models import WEEKDAY_KEYS, StampEvent
from pronto.render import daily_table
from pronto.schedule import format_schedule, parse_schedule
from pronto.stamps import next_stamp_kind, quick_stamp, stamp_from_label

console = Console()


def parse_stamps(args: list[str]) -> list[StampEvent]:
    """
    Turn 'HH:MM=label' arguments into stamps.

    A bare 'HH:MM' alternates with the stamps before it, like the quick stamp
    button does.
    """
    stamps: list[StampEvent] = []
    for arg in args:
        time, sep, label = arg.partition("=")
        if ":" not in time:
            msg = f"Invalid stamp {arg!r}: expected HH:MM or HH:MM=label"
            raise InvalidStampError(msg)
        if not sep:
            stamps.append(quick_stamp(stamps, time))
            continue
        stamp = stamp_from_label(time, label)
        if stamp is None:
            msg = f"Stamp label {label!r} is neither an entry nor an exit"
            raise InvalidStampError(msg)
        stamps.append(stamp)
    return stamps


def configure() -> None:
    """Interactive configuration setup."""
    path = config_path()
    current = Settings.load(path) or Settings()
    console.print("Pronto Configuration", style="bold")
    console.print("=" * 40)

    tolerance = input(f"Tolerance in minutes [{current.tolerance}]: ").strip()
    timezone = input(f"Timezone [{current.timezone}]: ").strip()

    weekly = current.weekly
    console.print(
        "Targets: '08:00-12:00, 13:00-17:00' for shifts, '08:00' for a duration, '-' for none"
    )
    for weekday, key in enumerate(WEEKDAY_KEYS):
        default = format_schedule(weekly.for_weekday(weekday))
        text = input(f"{key.capitalize()} [{default}]: ").strip()
        if text:
            weekly = weekly.replace_day(weekday, parse_schedule(text))

    settings = Settings(
        tolerance=int(tolerance) if tolerance.isdigit() else current.tolerance,
        timezone=timezone or current.timezone,
        weekly=weekly,
        overrides=current.overrides,
    )
    settings.save(path)
    console.print("\n✓ Configuration saved successfully!", style="green")
    console.print(f"Config file: {path}")


def show_stats(args: argparse.Namespace) -> None:
    """Evaluate one day and print its statistics."""
    settings = load_settings()
    tz = settings.tzinfo
    today = datetime.now(tz).date()
    target_date = date.fromisoformat(args.date) if args.date else today

    if args.schedule is not None:
        schedule = parse_schedule(args.schedule)
    else:
        schedule = settings.schedule_for(target_date)
    tolerance = args.tolerance if args.tolerance is not None else settings.tolerance
    now_minute = parse_time(args.now) if args.now else None

    result = compute_daily_stats(
        parse_stamps(args.stamps),
        schedule,
        tolerance,
        is_today=target_date == today,
        now_minute=now_minute,
        tz=tz,
    )
    console.print(daily_table(result, target_date))


def show_next(args: argparse.Namespace) -> None:
    """Print the kind of stamp the quick stamp button would record next."""
    kind = next_stamp_kind(parse_stamps(args.stamps))
    console.print(kind.value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pronto", description="Work hours tracker")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Configure tolerance, timezone and targets")

    stats = subparsers.add_parser("stats", help="Show worked time, balance and prediction")
    stats.add_argument("--date", help="Day to evaluate (YYYY-MM-DD). Defaults to today.")
    stats.add_argument("--tolerance", type=int, help="Tolerance in minutes")
    stats.add_argument("--schedule", help="Target schedule, e.g. '08:00-12:00, 13:00-17:00'")
    stats.add_argument("--now", help="Current time (HH:MM) for an open session")
    stats.add_argument("stamps", nargs="*", help="Stamps as HH:MM=label or HH:MM")

    next_stamp = subparsers.add_parser("next", help="Show the next quick stamp kind")
    next_stamp.add_argument("stamps", nargs="*", help="Stamps as HH:MM=label or HH:MM")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    try:
        if args.command == "config":
            configure()
        elif args.command == "stats":
            show_stats(args)
        else:
            show_next(args)
    except (ProntoError, ValueError, ZoneInfoNotFoundError) as e:
        console.print(f"Error: {escape(str(e))}", style="red")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
