"""
Database setup for the workout store.

SQLAlchemy engine, session factory, and the workouts table.
Timestamps are stored as naive UTC so SQLite range queries compare
correctly; conversion to and from local time happens in the store.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy import DateTime, Engine, Integer, String, Text, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class WorkoutRecord(Base):
    __tablename__ = "workouts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)  # naive UTC

    def __repr__(self) -> str:
        return f"<WorkoutRecord {self.id} {self.date.isoformat()} rating={self.rating}>"


def is_memory_database(database_url: str) -> bool:
    """True for SQLite URLs without a database file."""
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine and make sure the schema exists.

    For SQLite file databases the parent directory is created first.
    An in-memory database lives in a single connection shared by all
    threads; otherwise each thread would see its own empty database.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        pool_args = {}
        if is_memory_database(database_url):
            pool_args["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            **pool_args,
        )
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)

    Base.metadata.create_all(engine)
    logger.info(f"Opened workout database at {url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory for short-lived, explicitly committed sessions."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
