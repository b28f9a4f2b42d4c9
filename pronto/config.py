"""Configuration management."""

import configparser
import logging
import os
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo

from pronto.errors import InvalidConfigError
from pronto.models import (
    WEEKDAY_KEYS,
    ScheduleOverride,
    TargetSchedule,
    WeeklyTargets,
    clamp_minutes,
)
from pronto.schedule import format_schedule, parse_schedule, resolve_schedule_for_date

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "pronto" / "config.ini"
CONFIG_PATH_ENV = "PRONTO_CONFIG"
DEFAULT_TOLERANCE = 10
DEFAULT_TIMEZONE = "America/Sao_Paulo"
OVERRIDE_PREFIX = "override:"


def _read_weekly(section: configparser.SectionProxy, fallback: WeeklyTargets) -> WeeklyTargets:
    days = tuple(
        parse_schedule(section[key]) if key in section else fallback.for_weekday(weekday)
        for weekday, key in enumerate(WEEKDAY_KEYS)
    )
    return WeeklyTargets(days)


def _read_date(section: configparser.SectionProxy, key: str) -> date:
    if key not in section:
        msg = f"Section [{section.name}] is missing '{key}'"
        raise InvalidConfigError(msg)
    try:
        return date.fromisoformat(section[key])
    except ValueError as e:
        msg = f"Section [{section.name}] has an invalid {key} date: {section[key]!r}"
        raise InvalidConfigError(msg) from e


def _write_weekly(targets: WeeklyTargets) -> dict[str, str]:
    return {
        key: format_schedule(targets.for_weekday(weekday))
        for weekday, key in enumerate(WEEKDAY_KEYS)
    }


@dataclass
class Settings:
    """Tolerance, timezone and target schedules."""

    tolerance: int = DEFAULT_TOLERANCE
    timezone: str = DEFAULT_TIMEZONE
    weekly: WeeklyTargets = field(default_factory=WeeklyTargets)
    overrides: list[ScheduleOverride] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tolerance = clamp_minutes(self.tolerance, "tolerance")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def schedule_for(self, target_date: date) -> TargetSchedule:
        """Resolve the target schedule for a date."""
        return resolve_schedule_for_date(target_date, self.weekly, self.overrides)

    def with_env(self) -> "Settings":
        """Apply PRONTO_TOLERANCE and PRONTO_TIMEZONE on top of these settings."""
        tolerance = os.environ.get("PRONTO_TOLERANCE")
        timezone = os.environ.get("PRONTO_TIMEZONE")
        return replace(
            self,
            tolerance=self.tolerance if tolerance is None else tolerance,
            timezone=timezone or self.timezone,
        )

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Settings | None":
        """Load settings from file."""
        if not path.is_file():
            return None

        config = configparser.ConfigParser(interpolation=None)
        config.read(path, encoding="utf-8")

        general = config["settings"] if config.has_section("settings") else {}
        weekly = WeeklyTargets()
        if config.has_section("targets"):
            weekly = _read_weekly(config["targets"], weekly)

        overrides = []
        for name in config.sections():
            if not name.startswith(OVERRIDE_PREFIX):
                continue
            section = config[name]
            overrides.append(
                ScheduleOverride(
                    name=name.removeprefix(OVERRIDE_PREFIX),
                    start_date=_read_date(section, "start"),
                    end_date=_read_date(section, "end"),
                    targets=_read_weekly(section, WeeklyTargets(((),) * len(WEEKDAY_KEYS))),
                )
            )

        logger.info("Loaded settings from %s (%d overrides)", path, len(overrides))
        return cls(
            tolerance=general.get("tolerance", DEFAULT_TOLERANCE),
            timezone=general.get("timezone", DEFAULT_TIMEZONE),
            weekly=weekly,
            overrides=overrides,
        )

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Save settings to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        config = configparser.ConfigParser(interpolation=None)
        config["settings"] = {
            "tolerance": str(self.tolerance),
            "timezone": self.timezone,
        }
        config["targets"] = _write_weekly(self.weekly)
        for override in self.overrides:
            config[f"{OVERRIDE_PREFIX}{override.name}"] = {
                "start": override.start_date.isoformat(),
                "end": override.end_date.isoformat(),
                **_write_weekly(override.targets),
            }
        with path.open("w", encoding="utf-8") as config_file:
            config.write(config_file)
        logger.info("Saved settings to %s", path)


def config_path() -> Path:
    """Config file location, overridable with PRONTO_CONFIG."""
    return Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))


def load_settings(path: Path | None = None) -> Settings:
    """Settings from the config file (or defaults) with environment values on top."""
    settings = Settings.load(path or config_path()) or Settings()
    return settings.with_env()
