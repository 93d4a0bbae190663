"""
Calendar JSON exporter.

Writes a rendered month and its workouts to JSON files for use by
other tools.
"""

import json
import logging
from pathlib import Path
from typing import List, Dict, Any
from datetime import date, datetime

from .models import MonthGrid, Workout


logger = logging.getLogger(__name__)


class DateEncoder(json.JSONEncoder):
    """JSON encoder that handles date and datetime objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (date, datetime)):
            return obj.isoformat()
        return super().default(obj)


def workout_to_dict(workout: Workout) -> Dict[str, Any]:
    return {
        "id": workout.id,
        "title": workout.title,
        "description": workout.description,
        "rating": workout.rating,
        "date": workout.date,
    }


class CalendarExporter:
    """Exports calendar data to JSON files."""

    def __init__(self, output_dir: Path):
        """Initialize exporter with the output directory."""
        self._output_dir = output_dir

    def _ensure_dirs(self) -> None:
        """Create output directory if it doesn't exist."""
        self._output_dir.mkdir(parents=True, exist_ok=True)

    def _write_json(self, filename: str, data: Any) -> Path:
        """Write data to JSON file."""
        self._ensure_dirs()
        filepath = self._output_dir / filename
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2, cls=DateEncoder)
        logger.info(f"Exported {filename}")
        return filepath

    def export_month(self, grid: MonthGrid, workouts: List[Workout]) -> Path:
        """
        Export a month grid and the workouts that fall inside it.

        Parameters:
            grid: Rendered month.
            workouts: Candidate workouts; only days present in the grid are kept.

        Returns:
            Path of the written file.
        """
        days = {cell.date for cell in grid.cells if cell.date is not None}
        in_month = [w for w in workouts if w.date.date() in days]

        data = {
            "month": grid.month,
            "title": grid.title,
            "weekday_headers": grid.weekday_headers,
            "offset": grid.offset,
            "weekly_count": grid.weekly_count,
            "total_workouts": grid.total_workouts,
            "cells": [
                {
                    "date": cell.date,
                    "workout_count": cell.workout_count,
                    "intensity": cell.intensity,
                }
                for cell in grid.cells
            ],
            "workouts": [workout_to_dict(w) for w in in_month],
        }

        return self._write_json(f"calendar_{grid.month:%Y_%m}.json", data)

    def export_workouts(self, workouts: List[Workout]) -> Path:
        """Export all workouts."""
        return self._write_json("workouts.json", [workout_to_dict(w) for w in workouts])

    def export_all(self, grid: MonthGrid, workouts: List[Workout]) -> None:
        """Export the month and the full workout list."""
        self.export_month(grid, workouts)
        self.export_workouts(workouts)
        logger.info(f"Export complete. Data written to {self._output_dir}")
