"""
Workout store.

Durable create/read/update/delete access to workouts, queried by
date range and returned in ascending date order.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Union
from uuid import uuid4

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from .calendar_grid import DateLike, day_bounds, to_local
from .config import AppConfig, CalendarConfig
from .database import WorkoutRecord, create_db_engine, create_session_factory
from .errors import NotFoundError, PersistenceError
from .models import Workout


logger = logging.getLogger(__name__)

WorkoutRef = Union[Workout, str]


def _workout_id(ref: WorkoutRef) -> str:
    return ref.id if isinstance(ref, Workout) else ref


class WorkoutStore:
    """
    Repository over the workouts table.

    Every read opens its own session, so a read issued after a write
    has returned always sees that write. Writes are serialized by a
    lock and commit before returning; a failed commit is rolled back
    and raised as PersistenceError. When every thread shares one
    connection (in-memory SQLite) reads take the write lock as well.
    """

    def __init__(
        self,
        database_url: str = "sqlite://",
        calendar: Optional[CalendarConfig] = None,
        engine: Optional[Engine] = None,
    ):
        """
        Initialize the store.

        Parameters:
            database_url: SQLAlchemy URL, ignored when engine is given.
            calendar: Calendar settings for day boundaries and returned dates.
            engine: Existing engine to reuse.
        """
        self._engine = engine if engine is not None else create_db_engine(database_url)
        self._sessions = create_session_factory(self._engine)
        self._calendar = calendar or CalendarConfig()
        self._write_lock = threading.Lock()
        if isinstance(self._engine.pool, StaticPool):
            self._read_lock = self._write_lock
        else:
            self._read_lock = nullcontext()

    @classmethod
    def from_config(cls, config: AppConfig) -> "WorkoutStore":
        """Open the store described by the application config."""
        return cls(config.store.database_url, calendar=config.calendar)

    def close(self) -> None:
        """Release database connections."""
        self._engine.dispose()

    def __enter__(self) -> "WorkoutStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # conversions

    def _to_db(self, value: DateLike) -> datetime:
        return to_local(value, self._calendar.timezone).astimezone(timezone.utc).replace(tzinfo=None)

    def _from_db(self, value: datetime) -> datetime:
        return value.replace(tzinfo=timezone.utc).astimezone(self._calendar.timezone)

    def _to_workout(self, record: WorkoutRecord) -> Workout:
        return Workout(
            id=record.id,
            date=self._from_db(record.date),
            rating=record.rating,
            title=record.title,
            description=record.description,
        )

    # reads

    def _fetch(self, stmt, action: str) -> list:
        try:
            with self._read_lock, self._sessions() as session:
                return list(session.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action}: {e}")
            raise PersistenceError(f"Could not {action}", detail=str(e)) from e

    def list_all(self) -> List[Workout]:
        """All workouts, ascending by date."""
        stmt = select(WorkoutRecord).order_by(WorkoutRecord.date, WorkoutRecord.id)
        return [self._to_workout(r) for r in self._fetch(stmt, "load workouts")]

    def list_between(self, start: DateLike, end: DateLike) -> List[Workout]:
        """Workouts with start <= date < end, ascending by date."""
        stmt = (
            select(WorkoutRecord)
            .where(WorkoutRecord.date >= self._to_db(start))
            .where(WorkoutRecord.date < self._to_db(end))
            .order_by(WorkoutRecord.date, WorkoutRecord.id)
        )
        return [self._to_workout(r) for r in self._fetch(stmt, "load workouts")]

    def list_for_day(self, day: DateLike) -> List[Workout]:
        """Workouts on the local calendar day containing day."""
        start, end = day_bounds(day, self._calendar.timezone)
        return self.list_between(start, end)

    def get(self, workout_id: str) -> Workout:
        """Fetch one workout by id."""
        stmt = select(WorkoutRecord).where(WorkoutRecord.id == workout_id)
        records = self._fetch(stmt, "load workout")
        if not records:
            raise NotFoundError(workout_id)
        return self._to_workout(records[0])

    def count(self) -> int:
        """Number of stored workouts."""
        stmt = select(func.count()).select_from(WorkoutRecord)
        return self._fetch(stmt, "count workouts")[0]

    # writes

    @contextmanager
    def _write(self, action: str) -> Iterator[Session]:
        with self._write_lock, self._sessions() as session:
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Failed to {action} workout: {e}")
                raise PersistenceError(f"Could not {action} workout", detail=str(e)) from e

    def create(
        self,
        title: Optional[str],
        description: Optional[str],
        rating: int,
        date: DateLike,
    ) -> Workout:
        """
        Persist a new workout.

        The rating is expected to be validated by the caller.

        Returns:
            The stored workout with its new id.
        """
        record = WorkoutRecord(
            id=str(uuid4()),
            title=title,
            description=description,
            rating=rating,
            date=self._to_db(date),
        )
        with self._write("create") as session:
            session.add(record)

        logger.info(f"Created workout {record.id}")
        return self._to_workout(record)

    def update(
        self,
        existing: WorkoutRef,
        title: Optional[str],
        description: Optional[str],
        rating: int,
        date: DateLike,
    ) -> Workout:
        """
        Overwrite the fields of an existing workout.

        Raises:
            NotFoundError: If the workout no longer exists.
        """
        workout_id = _workout_id(existing)
        with self._write("update") as session:
            record = session.get(WorkoutRecord, workout_id)
            if record is None:
                raise NotFoundError(workout_id)
            record.title = title
            record.description = description
            record.rating = rating
            record.date = self._to_db(date)

        logger.info(f"Updated workout {workout_id}")
        return self._to_workout(record)

    def delete(self, workout: WorkoutRef) -> None:
        """
        Permanently remove a workout.

        Raises:
            NotFoundError: If the workout does not exist.
        """
        workout_id = _workout_id(workout)
        with self._write("delete") as session:
            record = session.get(WorkoutRecord, workout_id)
            if record is None:
                raise NotFoundError(workout_id)
            session.delete(record)

        logger.info(f"Deleted workout {workout_id}")
