"""
Exception classes for the workout calendar.

Store and editor operations raise these; the presentation layer
turns them into user-facing messages.
"""

from typing import Optional


class WorkoutCalendarError(Exception):
    """
    Base exception for the workout calendar.

    Attributes:
        message: Human-readable error message.
        detail: Additional error details.
    """

    def __init__(self, message: str = "An error occurred", detail: Optional[str] = None):
        self.message = message
        self.detail = detail or message
        super().__init__(self.message)


class ValidationError(WorkoutCalendarError):
    """
    Raised when workout fields are rejected before reaching the store.

    Used when:
    - rating is not an integer in [1, 5]
    - the workout date is missing
    """

    def __init__(self, message: str = "Invalid workout", field: Optional[str] = None):
        self.field = field
        super().__init__(message=message, detail=field)


class NotFoundError(WorkoutCalendarError):
    """Raised when an update, delete or lookup targets an unknown workout id."""

    def __init__(self, workout_id: str, message: Optional[str] = None):
        self.workout_id = workout_id
        super().__init__(
            message=message or f"Workout not found: {workout_id}",
            detail=workout_id,
        )


class PersistenceError(WorkoutCalendarError):
    """Raised when the database fails to commit or read."""

    def __init__(self, message: str = "Could not save changes", detail: Optional[str] = None):
        super().__init__(message=message, detail=detail)
