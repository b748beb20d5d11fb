"""Classification of driver and ORM failures into a closed error type.

SQLAlchemy wraps DBAPI errors from several drivers (psycopg for PostgreSQL,
sqlite3 in tests), and each reports constraint violations differently. The
store layer narrows them once, here, so that callers and the HTTP boundary
only ever switch on :class:`StoreErrorKind`.
"""
from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session

# SQLSTATE codes (PostgreSQL class 23 - integrity constraint violation).
_SQLSTATE_KINDS = {
    "23505": "UNIQUE_VIOLATION",
    "23503": "FOREIGN_KEY_VIOLATION",
    "23502": "NOT_NULL_VIOLATION",
    "23514": "CHECK_VIOLATION",
}

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<target>[\w., ]+)")
_PG_UNIQUE_KEY = re.compile(r"Key \((?P<target>[^)]+)\)=")


class StoreErrorKind(str, Enum):
    """Failure categories reported by the persistent store."""

    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    NOT_NULL_VIOLATION = "not_null_violation"
    CHECK_VIOLATION = "check_violation"
    CONNECTION = "connection"
    OTHER = "other"


class StoreError(Exception):
    """A store operation failed.

    Attributes:
        kind: Which category of failure occurred.
        target: Column names involved in a constraint violation, when known.
    """

    def __init__(self, kind: StoreErrorKind, target: tuple[str, ...] = ()) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.target = target


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    # psycopg 3 exposes ``sqlstate``; psycopg2 exposes ``pgcode``.
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _unique_target(message: str) -> tuple[str, ...]:
    match = _SQLITE_UNIQUE.search(message)
    if match:
        columns = [part.strip() for part in match.group("target").split(",")]
        return tuple(column.rsplit(".", 1)[-1] for column in columns)
    match = _PG_UNIQUE_KEY.search(message)
    if match:
        return tuple(part.strip() for part in match.group("target").split(","))
    return ()


def _classify_integrity(exc: IntegrityError) -> StoreError:
    message = str(exc.orig)
    code = _sqlstate(exc)
    if code in _SQLSTATE_KINDS:
        kind = StoreErrorKind[_SQLSTATE_KINDS[code]]
    elif "UNIQUE constraint failed" in message:
        kind = StoreErrorKind.UNIQUE_VIOLATION
    elif "FOREIGN KEY constraint failed" in message:
        kind = StoreErrorKind.FOREIGN_KEY_VIOLATION
    elif "NOT NULL constraint failed" in message:
        kind = StoreErrorKind.NOT_NULL_VIOLATION
    elif "CHECK constraint failed" in message:
        kind = StoreErrorKind.CHECK_VIOLATION
    else:
        kind = StoreErrorKind.OTHER

    target = _unique_target(message) if kind is StoreErrorKind.UNIQUE_VIOLATION else ()
    return StoreError(kind, target)


def classify_store_error(exc: SQLAlchemyError) -> StoreError:
    """Narrow a SQLAlchemy exception to a :class:`StoreError`."""
    if isinstance(exc, IntegrityError):
        return _classify_integrity(exc)
    if isinstance(exc, DisconnectionError | InterfaceError | OperationalError):
        return StoreError(StoreErrorKind.CONNECTION)
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StoreError(StoreErrorKind.CONNECTION)
    return StoreError(StoreErrorKind.OTHER)


@contextmanager
def translate_store_errors(db: Session) -> Iterator[None]:
    """Roll back and re-raise SQLAlchemy failures as :class:`StoreError`."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        raise classify_store_error(exc) from exc
