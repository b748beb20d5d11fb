"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from smokes_hub.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import smokes_hub.models  # noqa: E402,F401


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs: object) -> Engine:
    """Create an engine, turning on foreign key enforcement for SQLite."""
    new_engine = create_engine(url, pool_pre_ping=True, **kwargs)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
