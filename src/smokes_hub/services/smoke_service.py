"""Service-level helpers for listing, sharing and removing smokes."""
from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from smokes_hub.core.errors import ForbiddenError, NotFoundError
from smokes_hub.db.errors import translate_store_errors
from smokes_hub.db.time import utcnow
from smokes_hub.models.rating import Rating
from smokes_hub.models.smoke import Smoke
from smokes_hub.models.user import User
from smokes_hub.schemas.map import MapSummary
from smokes_hub.schemas.smoke import SmokeCreate, SmokeResponse
from smokes_hub.schemas.user import UserResponse
from smokes_hub.services.map_service import require_map

__all__ = [
    "create_smoke",
    "delete_smoke",
    "get_visible_smoke",
    "list_smokes_for_map",
    "to_smoke_response",
]

logger = logging.getLogger(__name__)


def to_smoke_response(smoke: Smoke, score: int = 0) -> SmokeResponse:
    """Convert a Smoke ORM instance and its derived score to an API schema."""
    return SmokeResponse(
        id=smoke.id,
        title=smoke.title,
        video_url=smoke.video_url,
        timestamp=smoke.timestamp,
        x_coord=smoke.x_coord,
        y_coord=smoke.y_coord,
        score=int(score),
        created_at=smoke.created_at,
        updated_at=smoke.updated_at,
        author=UserResponse.model_validate(smoke.author),
        map=MapSummary.model_validate(smoke.map),
    )


def get_visible_smoke(db: Session, smoke_id: int, *, for_update: bool = False) -> Smoke:
    """Return a smoke that has not been soft-deleted.

    Args:
        db: Database session.
        smoke_id: Identifier of the smoke.
        for_update: Lock the row until the surrounding transaction ends.

    Raises:
        NotFoundError: If the smoke does not exist or was deleted.
    """
    query = db.query(Smoke).filter(Smoke.id == smoke_id, Smoke.deleted_at.is_(None))
    if for_update:
        query = query.with_for_update()
    smoke = query.first()
    if smoke is None:
        raise NotFoundError("Smoke", smoke_id)
    return smoke


def list_smokes_for_map(db: Session, map_id: int) -> list[SmokeResponse]:
    """Return the visible smokes on a map, best rated first.

    Score is the signed sum of the smoke's ratings, 0 when it has none. Ties
    are broken by newest first.
    """
    require_map(db, map_id)

    scores = (
        db.query(Rating.smoke_id.label("smoke_id"), func.sum(Rating.value).label("score"))
        .group_by(Rating.smoke_id)
        .subquery()
    )
    score = func.coalesce(scores.c.score, 0)
    rows = (
        db.query(Smoke, score)
        .outerjoin(scores, scores.c.smoke_id == Smoke.id)
        .options(joinedload(Smoke.author), joinedload(Smoke.map))
        .filter(Smoke.map_id == map_id, Smoke.deleted_at.is_(None))
        .order_by(score.desc(), Smoke.created_at.desc(), Smoke.id.desc())
        .all()
    )
    return [to_smoke_response(smoke, value) for smoke, value in rows]


def create_smoke(db: Session, payload: SmokeCreate, author: User) -> SmokeResponse:
    """Persist a new smoke owned by ``author``.

    Raises:
        NotFoundError: If the target map does not exist.
    """
    require_map(db, payload.map_id)

    smoke = Smoke(
        title=payload.title,
        video_url=str(payload.video_url),
        timestamp=payload.timestamp,
        x_coord=payload.x_coord,
        y_coord=payload.y_coord,
        map_id=payload.map_id,
        author_id=author.id,
    )
    with translate_store_errors(db):
        db.add(smoke)
        db.commit()
        db.refresh(smoke)

    logger.info("User %s shared smoke %s on map %s", author.id, smoke.id, smoke.map_id)
    return to_smoke_response(smoke)


def delete_smoke(db: Session, smoke_id: int, caller: User) -> None:
    """Soft-delete a smoke on behalf of its author.

    Raises:
        NotFoundError: If the smoke does not exist or is already deleted.
        ForbiddenError: If ``caller`` is not the author.
    """
    with translate_store_errors(db):
        smoke = get_visible_smoke(db, smoke_id, for_update=True)
        if smoke.author_id != caller.id:
            db.rollback()
            raise ForbiddenError("You can only delete your own smokes")
        smoke.deleted_at = utcnow()
        db.commit()

    logger.info("User %s deleted smoke %s", caller.id, smoke_id)
