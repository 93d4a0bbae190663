"""Data models for the workout calendar."""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional, List, Tuple

from .errors import ValidationError


MIN_RATING = 1
MAX_RATING = 5

DEFAULT_TITLE = "Untitled"
DEFAULT_DESCRIPTION = "No description"

# workouts per day at which a day reaches full colour
INTENSITY_SATURATION = 2.0


def clamp_rating(value: int) -> int:
    """Clamp a rating into [MIN_RATING, MAX_RATING]."""
    return max(MIN_RATING, min(MAX_RATING, int(value)))


def workout_intensity(count: int) -> float:
    """
    Colour intensity for a day with the given number of workouts.

    Empty days are 0.0; otherwise intensity grows linearly and
    saturates at 1.0 once a day has two workouts.
    """
    if count <= 0:
        return 0.0
    return min(count / INTENSITY_SATURATION, 1.0)


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_workout_fields(
    title: Optional[str],
    description: Optional[str],
    rating: int,
    when: Optional[datetime],
) -> Tuple[Optional[str], Optional[str], int, datetime]:
    """
    Check workout fields at the point of save.

    Blank title and description are normalized to None so that display
    defaults can be applied later.

    Returns:
        Tuple of (title, description, rating, date) ready for the store.

    Raises:
        ValidationError: If the rating is out of range or the date is missing.
    """
    if when is None:
        raise ValidationError("A workout needs a date", field="date")

    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(
            f"Rating must be a whole number between {MIN_RATING} and {MAX_RATING}",
            field="rating",
        )
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}",
            field="rating",
        )

    return _clean_text(title), _clean_text(description), rating, when


@dataclass
class Workout:
    """A single logged workout."""

    id: str
    date: datetime
    rating: int
    title: Optional[str] = None
    description: Optional[str] = None

    @property
    def display_title(self) -> str:
        """Title shown to the user, falling back to 'Untitled'."""
        return self.title or DEFAULT_TITLE

    @property
    def display_description(self) -> str:
        """Description shown to the user, falling back to 'No description'."""
        return self.description or DEFAULT_DESCRIPTION


@dataclass(frozen=True)
class CalendarCell:
    """One position in the month grid; date is None for leading padding."""

    date: Optional[date]
    workout_count: int = 0

    @property
    def is_placeholder(self) -> bool:
        return self.date is None

    @property
    def intensity(self) -> float:
        return workout_intensity(self.workout_count)


@dataclass
class MonthGrid:
    """Render-ready month view."""

    month: date
    title: str
    weekday_headers: List[str]
    cells: List[CalendarCell] = field(default_factory=list)
    weekly_count: int = 0

    @property
    def offset(self) -> int:
        """Number of leading placeholder cells."""
        count = 0
        for cell in self.cells:
            if not cell.is_placeholder:
                break
            count += 1
        return count

    @property
    def total_workouts(self) -> int:
        """Workouts logged in the displayed month."""
        return sum(c.workout_count for c in self.cells)

    def rows(self) -> List[List[Optional[CalendarCell]]]:
        """
        Split cells into weeks of seven columns.

        The last row is padded with None so every row has seven entries.
        """
        rows = []
        for start in range(0, len(self.cells), 7):
            row: List[Optional[CalendarCell]] = list(self.cells[start : start + 7])
            row.extend([None] * (7 - len(row)))
            rows.append(row)
        return rows
