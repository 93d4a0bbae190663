"""
Tests for workout calendar models.

Tests rating rules, display defaults and derived cell values.
"""

import pytest
from datetime import date, datetime

from workout_calendar.errors import ValidationError
from workout_calendar.models import (
    CalendarCell,
    MonthGrid,
    Workout,
    clamp_rating,
    validate_workout_fields,
    workout_intensity,
)


class TestRating:
    """Tests for rating clamping."""

    def test_clamp_within_range(self):
        """Test in-range ratings are unchanged."""
        assert clamp_rating(1) == 1
        assert clamp_rating(3) == 3
        assert clamp_rating(5) == 5

    def test_clamp_out_of_range(self):
        """Test out-of-range ratings snap to the bounds."""
        assert clamp_rating(0) == 1
        assert clamp_rating(-4) == 1
        assert clamp_rating(6) == 5
        assert clamp_rating(100) == 5


class TestWorkoutIntensity:
    """Tests for the colour intensity mapping."""

    def test_counts_zero_one_three(self):
        """Test intensities for 0, 1 and 3 workouts saturate at 2."""
        assert [workout_intensity(n) for n in (0, 1, 3)] == [0.0, 0.5, 1.0]

    def test_two_workouts_is_full(self):
        """Test two workouts reach full intensity."""
        assert workout_intensity(2) == 1.0

    def test_negative_is_empty(self):
        """Test negative counts are treated as empty."""
        assert workout_intensity(-1) == 0.0


class TestValidateWorkoutFields:
    """Tests for save-time validation."""

    def test_valid_fields(self):
        """Test valid fields pass through with text trimmed."""
        when = datetime(2024, 3, 15, 8, 0)
        result = validate_workout_fields("  Legs ", "squats", 4, when)

        assert result == ("Legs", "squats", 4, when)

    def test_blank_text_becomes_none(self):
        """Test blank title and description are stored as None."""
        title, description, _, _ = validate_workout_fields(
            "   ", "", 1, datetime(2024, 3, 15)
        )

        assert title is None
        assert description is None

    def test_rating_out_of_range(self):
        """Test ratings outside [1, 5] are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_workout_fields("Run", None, 6, datetime(2024, 3, 15))
        assert exc_info.value.field == "rating"

        with pytest.raises(ValidationError):
            validate_workout_fields("Run", None, 0, datetime(2024, 3, 15))

    def test_rating_not_integer(self):
        """Test non-integer ratings are rejected."""
        with pytest.raises(ValidationError):
            validate_workout_fields("Run", None, 2.5, datetime(2024, 3, 15))
        with pytest.raises(ValidationError):
            validate_workout_fields("Run", None, True, datetime(2024, 3, 15))

    def test_missing_date(self):
        """Test a missing date is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate_workout_fields("Run", None, 3, None)
        assert exc_info.value.field == "date"


class TestWorkout:
    """Tests for Workout display defaults."""

    def test_display_defaults(self):
        """Test missing title and description fall back to defaults."""
        workout = Workout(id="a", date=datetime(2024, 3, 15), rating=2)

        assert workout.display_title == "Untitled"
        assert workout.display_description == "No description"
        assert workout.title is None

    def test_display_values(self):
        """Test present values are shown as-is."""
        workout = Workout(
            id="a",
            date=datetime(2024, 3, 15),
            rating=2,
            title="Push",
            description="bench and dips",
        )

        assert workout.display_title == "Push"
        assert workout.display_description == "bench and dips"


class TestCalendarCell:
    """Tests for CalendarCell."""

    def test_placeholder(self):
        """Test cells without a date are placeholders."""
        cell = CalendarCell(date=None)

        assert cell.is_placeholder
        assert cell.intensity == 0.0

    def test_day_cell_intensity(self):
        """Test day cells derive intensity from their count."""
        cell = CalendarCell(date=date(2024, 3, 15), workout_count=1)

        assert not cell.is_placeholder
        assert cell.intensity == 0.5


class TestMonthGrid:
    """Tests for MonthGrid helpers."""

    def _grid(self):
        cells = [CalendarCell(date=None)] * 2 + [
            CalendarCell(date=date(2024, 2, d), workout_count=d % 3) for d in range(1, 30)
        ]
        return MonthGrid(
            month=date(2024, 2, 1),
            title="February 2024",
            weekday_headers=list("SMTWTFS"),
            cells=cells,
        )

    def test_offset(self):
        """Test offset counts leading placeholders."""
        assert self._grid().offset == 2

    def test_rows_padded_to_seven(self):
        """Test rows split into weeks with the last row padded."""
        rows = self._grid().rows()

        assert len(rows) == 5
        assert all(len(row) == 7 for row in rows)
        assert rows[-1][-1] is None

    def test_total_workouts(self):
        """Test total of all cell counts."""
        expected = sum(d % 3 for d in range(1, 30))
        assert self._grid().total_workouts == expected
