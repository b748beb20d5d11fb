"""Up/down ratings on smokes.

A user holds at most one rating per smoke; rating again overwrites the
previous value. Scores are never stored, they are summed when smokes are
listed.
"""
from __future__ import annotations

import logging

from sqlalchemy import insert, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smokes_hub.core.errors import InvalidInputError
from smokes_hub.db.errors import translate_store_errors
from smokes_hub.db.time import utcnow
from smokes_hub.models.rating import RATING_VALUES, Rating
from smokes_hub.models.smoke import Smoke
from smokes_hub.services.smoke_service import get_visible_smoke
from smokes_hub.services.user_service import require_user

__all__ = ["get_user_ratings", "remove_rating", "upsert_rating", "validate_rating_value"]

logger = logging.getLogger(__name__)

_NATIVE_UPSERT = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


def validate_rating_value(value: object) -> int:
    """Return ``value`` if it is exactly the integer 1 or -1.

    Booleans are rejected even though ``True == 1``.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value not in RATING_VALUES:
        raise InvalidInputError("Rating value must be either 1 (upvote) or -1 (downvote)")
    return value


def _write_rating(db: Session, user_id: int, smoke_id: int, value: int) -> None:
    now = utcnow()
    dialect = db.get_bind().dialect.name
    native_insert = _NATIVE_UPSERT.get(dialect)

    if native_insert is not None:
        stmt = native_insert(Rating).values(
            user_id=user_id, smoke_id=smoke_id, value=value, created_at=now, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Rating.user_id, Rating.smoke_id],
            set_={"value": stmt.excluded.value, "updated_at": stmt.excluded.updated_at},
        )
        db.execute(stmt)
        return

    try:
        with db.begin_nested():
            db.execute(
                insert(Rating).values(
                    user_id=user_id, smoke_id=smoke_id, value=value, created_at=now, updated_at=now
                )
            )
    except IntegrityError:
        db.execute(
            update(Rating)
            .where(Rating.user_id == user_id, Rating.smoke_id == smoke_id)
            .values(value=value, updated_at=now)
        )


def upsert_rating(db: Session, user_id: int, smoke_id: int, value: object) -> None:
    """Create or overwrite the caller's rating on a smoke.

    Raises:
        InvalidInputError: If ``value`` is not 1 or -1. Checked before touching the database.
        NotFoundError: If the smoke is missing or deleted, or the user is missing.
    """
    rating_value = validate_rating_value(value)

    with translate_store_errors(db):
        get_visible_smoke(db, smoke_id, for_update=True)
        require_user(db, user_id)
        _write_rating(db, user_id, smoke_id, rating_value)
        db.commit()

    logger.debug("User %s rated smoke %s with %s", user_id, smoke_id, rating_value)


def remove_rating(db: Session, user_id: int, smoke_id: int) -> None:
    """Delete the caller's rating on a smoke. Removing a missing rating is a no-op."""
    with translate_store_errors(db):
        get_visible_smoke(db, smoke_id, for_update=True)
        require_user(db, user_id)
        db.query(Rating).filter(
            Rating.user_id == user_id,
            Rating.smoke_id == smoke_id,
        ).delete(synchronize_session=False)
        db.commit()


def get_user_ratings(db: Session, user_id: int) -> dict[int, int]:
    """Return ``{smoke_id: value}`` for the user's ratings on visible smokes."""
    rows = (
        db.query(Rating.smoke_id, Rating.value)
        .join(Smoke, Smoke.id == Rating.smoke_id)
        .filter(Rating.user_id == user_id, Smoke.deleted_at.is_(None))
        .all()
    )
    return {smoke_id: value for smoke_id, value in rows}
