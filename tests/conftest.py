"""Shared fixtures for workout calendar tests."""

from zoneinfo import ZoneInfo

import matplotlib
import pytest

from workout_calendar.calendar_grid import CalendarGridBuilder
from workout_calendar.config import CalendarConfig
from workout_calendar.store import WorkoutStore


# render plots off-screen
matplotlib.use("Agg")

NEW_YORK = ZoneInfo("America/New_York")


@pytest.fixture
def calendar_config():
    """Sunday-first calendar in New York time."""
    return CalendarConfig(timezone=NEW_YORK, first_weekday=6)


@pytest.fixture
def builder(calendar_config):
    return CalendarGridBuilder(calendar_config)


@pytest.fixture
def store(tmp_path, calendar_config):
    """Workout store backed by a temporary SQLite file."""
    workout_store = WorkoutStore(
        f"sqlite:///{tmp_path / 'workouts.db'}", calendar=calendar_config
    )
    yield workout_store
    workout_store.close()
