"""
Tests for calendar visualizations.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import numpy as np

from workout_calendar.models import MonthGrid, Workout
from workout_calendar.visualizations import (
    grid_to_matrix,
    plot_month_heatmap,
    plot_weekly_counts,
)


NEW_YORK = ZoneInfo("America/New_York")


def _grid(builder):
    workouts = [
        Workout(id="a", date=datetime(2024, 3, 2, 7, tzinfo=NEW_YORK), rating=3),
        Workout(id="b", date=datetime(2024, 3, 3, 7, tzinfo=NEW_YORK), rating=3),
        Workout(id="c", date=datetime(2024, 3, 3, 9, tzinfo=NEW_YORK), rating=3),
    ]
    return builder.build(date(2024, 3, 1), workouts, today=date(2024, 3, 4))


class TestGridToMatrix:
    """Tests for grid_to_matrix."""

    def test_shape_and_values(self, builder):
        """Test placeholders are NaN and days carry their intensity."""
        matrix = grid_to_matrix(_grid(builder))

        assert matrix.shape == (6, 7)
        assert np.isnan(matrix[0, :5]).all()
        assert matrix[0, 5] == 0.0
        assert matrix[0, 6] == 0.5
        assert matrix[1, 0] == 1.0
        assert np.isnan(matrix[5, 1:]).all()

    def test_empty_grid(self):
        """Test an empty grid gives an empty matrix."""
        grid = MonthGrid(month=date(2024, 3, 1), title="March 2024", weekday_headers=[])

        assert grid_to_matrix(grid).shape == (0, 7)


class TestPlots:
    """Tests that plots render to files without displaying."""

    def test_month_heatmap(self, tmp_path, builder):
        """Test the heatmap is written to disk."""
        output = tmp_path / "calendar.png"

        plot_month_heatmap(_grid(builder), output, show=False)

        assert output.exists()
        assert output.stat().st_size > 0

    def test_weekly_counts(self, tmp_path, builder):
        """Test the weekly chart is written to disk."""
        output = tmp_path / "weekly.png"

        plot_weekly_counts(_grid(builder), output, show=False)

        assert output.exists()

    def test_empty_grid_skipped(self, tmp_path, caplog):
        """Test an empty grid logs a warning and writes nothing."""
        grid = MonthGrid(month=date(2024, 3, 1), title="March 2024", weekday_headers=[])
        output = tmp_path / "calendar.png"

        plot_month_heatmap(grid, output, show=False)

        assert not output.exists()
        assert "No calendar cells to plot" in caplog.text
