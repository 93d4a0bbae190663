"""Configuration management for the workout calendar."""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


# load environment variables from .env file
load_dotenv()


WEEKDAY_NAMES = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

# python calendar numbering: 0 = Monday ... 6 = Sunday
SUNDAY = 6


def parse_first_weekday(value: str) -> int:
    """
    Parse a first-day-of-week setting.

    Accepts a weekday name ("sunday", "mon") or a number 0-6
    where 0 is Monday.
    """
    text = value.strip().lower()
    if text.isdigit():
        number = int(text)
        if 0 <= number <= 6:
            return number
        raise ValueError(f"First weekday must be between 0 and 6, got {number}")

    for index, name in enumerate(WEEKDAY_NAMES):
        if len(text) >= 3 and name.startswith(text):
            return index

    raise ValueError(f"Unknown weekday: {value!r}")


@dataclass(frozen=True)
class CalendarConfig:
    """Calendar settings used for day and week boundaries."""

    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    first_weekday: int = SUNDAY

    def __post_init__(self):
        if not 0 <= self.first_weekday <= 6:
            raise ValueError(
                f"First weekday must be between 0 and 6, got {self.first_weekday}"
            )

    @classmethod
    def from_env(cls) -> "CalendarConfig":
        """
        Create config from environment variables.
        """
        tz_name = os.getenv("CALENDAR_TIMEZONE", "UTC")
        first_weekday = os.getenv("CALENDAR_FIRST_WEEKDAY", "sunday")

        try:
            timezone = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone in CALENDAR_TIMEZONE: {tz_name}") from e

        return cls(timezone=timezone, first_weekday=parse_first_weekday(first_weekday))


@dataclass(frozen=True)
class PathConfig:
    """File path configuration."""

    base_dir: Path
    data_dir: Path
    output_dir: Path

    @classmethod
    def default(cls) -> "PathConfig":
        """
        Create default path configuration.
        """
        base = Path(__file__).parent.parent
        return cls(
            base_dir=base,
            data_dir=base / "data",
            output_dir=base / "output",
        )


@dataclass(frozen=True)
class StoreConfig:
    """Database settings for the workout store."""

    database_url: str

    @classmethod
    def from_env(cls, paths: Optional[PathConfig] = None) -> "StoreConfig":
        """
        Create config from WORKOUT_DB_URL, defaulting to a SQLite file
        in the data directory.
        """
        url = os.getenv("WORKOUT_DB_URL")
        if not url:
            paths = paths or PathConfig.default()
            url = f"sqlite:///{paths.data_dir / 'workouts.db'}"
        return cls(database_url=url)


@dataclass(frozen=True)
class AppConfig:
    """Application-wide configuration."""

    calendar: CalendarConfig
    store: StoreConfig
    paths: PathConfig
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Load full application configuration.
        """
        paths = PathConfig.default()
        return cls(
            calendar=CalendarConfig.from_env(),
            store=StoreConfig.from_env(paths),
            paths=paths,
            log_level=os.getenv("WORKOUT_CALENDAR_LOG_LEVEL", "INFO").upper(),
        )
