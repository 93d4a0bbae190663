"""
Presentation model for the calendar screens.

MonthView drives month navigation and rendering; DayEditor holds the
form state for one selected day and calls back into the store. Both
re-fetch from the store on every render instead of caching results.
"""

import calendar
import logging
from datetime import date, datetime, time
from typing import List, Optional

from .calendar_grid import CalendarGridBuilder, DateLike, local_day, to_local
from .errors import NotFoundError, PersistenceError
from .models import (
    MIN_RATING,
    MonthGrid,
    Workout,
    clamp_rating,
    validate_workout_fields,
)
from .store import WorkoutStore


logger = logging.getLogger(__name__)


class MonthView:
    """Month grid screen: navigation plus a fresh render on request."""

    def __init__(
        self,
        store: WorkoutStore,
        builder: CalendarGridBuilder,
        current_month: Optional[DateLike] = None,
    ):
        self._store = store
        self._builder = builder
        reference = builder.today() if current_month is None else current_month
        self.current_month: date = builder.first_of_month(reference)

    def previous_month(self) -> date:
        """Move back one month."""
        self.current_month = self._builder.shift_month(self.current_month, -1)
        return self.current_month

    def next_month(self) -> date:
        """Move forward one month."""
        self.current_month = self._builder.shift_month(self.current_month, 1)
        return self.current_month

    def go_to(self, day: DateLike) -> date:
        """Jump to the month containing day."""
        self.current_month = self._builder.first_of_month(day)
        return self.current_month

    def render(self, today: Optional[DateLike] = None) -> MonthGrid:
        """Build the grid for the current month from the latest stored workouts."""
        return self._builder.build(self.current_month, self._store.list_all(), today)

    def select_day(self, day: DateLike) -> "DayEditor":
        """Open the editor for a day and load its workouts."""
        editor = DayEditor(self._store, self._builder, day)
        editor.refresh()
        return editor


class DayEditor:
    """
    Editor for the workouts of one day.

    Holds the add/edit form. Saving creates a new workout unless an
    existing one was picked with begin_edit, in which case that record
    is overwritten. Failed saves and deletes never update the day list
    optimistically; it is re-fetched from the store instead.
    """

    def __init__(self, store: WorkoutStore, builder: CalendarGridBuilder, day: DateLike):
        self._store = store
        self._builder = builder
        self.day: date = local_day(day, builder.timezone)
        self.workouts: List[Workout] = []
        self.reset_form()

    @property
    def heading(self) -> str:
        """Screen heading, e.g. 'Add Workout for Mar 15, 2024'."""
        return (
            f"Add Workout for {calendar.month_abbr[self.day.month]} "
            f"{self.day.day}, {self.day.year}"
        )

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    def refresh(self) -> List[Workout]:
        """Reload the workouts for the selected day."""
        self.workouts = self._store.list_for_day(self.day)
        return self.workouts

    def reset_form(self) -> None:
        """Clear form fields and leave edit mode."""
        self.title = ""
        self.description = ""
        self.rating = MIN_RATING
        self.time_of_day = time()
        self.editing: Optional[Workout] = None

    def set_rating(self, value: int) -> int:
        self.rating = clamp_rating(value)
        return self.rating

    def step_rating(self, delta: int) -> int:
        """Step the rating up or down, staying within bounds."""
        return self.set_rating(self.rating + delta)

    def begin_edit(self, workout: Workout) -> None:
        """Load an existing workout into the form."""
        self.editing = workout
        self.title = workout.title or ""
        self.description = workout.description or ""
        self.rating = workout.rating
        self.time_of_day = to_local(workout.date, self._builder.timezone).time()

    def _form_datetime(self) -> datetime:
        return datetime.combine(self.day, self.time_of_day, tzinfo=self._builder.timezone)

    def _reconcile(self) -> None:
        try:
            self.refresh()
        except PersistenceError as e:
            logger.warning(f"Could not reload workouts for {self.day}: {e}")

    def save(self) -> Workout:
        """
        Validate the form and create or update the workout.

        Raises:
            ValidationError: Form values rejected; nothing is written.
            NotFoundError: The workout being edited was deleted meanwhile.
            PersistenceError: The store could not commit.
        """
        title, description, rating, when = validate_workout_fields(
            self.title, self.description, self.rating, self._form_datetime()
        )

        try:
            if self.editing is None:
                saved = self._store.create(title, description, rating, when)
            else:
                saved = self._store.update(self.editing, title, description, rating, when)
        except NotFoundError:
            self.editing = None
            self._reconcile()
            raise
        except PersistenceError:
            self._reconcile()
            raise

        self.refresh()
        self.reset_form()
        return saved

    def delete(self, workout: Workout) -> None:
        """
        Delete a workout and reload the day.

        Raises:
            NotFoundError: The workout was already gone.
            PersistenceError: The store could not commit.
        """
        try:
            self._store.delete(workout)
        except (NotFoundError, PersistenceError):
            self._reconcile()
            raise

        if self.editing is not None and self.editing.id == workout.id:
            self.reset_form()
        self.refresh()
