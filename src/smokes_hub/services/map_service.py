"""Read helpers for the static map catalog."""
from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from smokes_hub.core.errors import NotFoundError
from smokes_hub.models.map import Map
from smokes_hub.models.smoke import Smoke
from smokes_hub.schemas.map import MapResponse

__all__ = ["get_map", "list_maps", "require_map", "to_map_response"]


def _visible_smoke_counts(db: Session):  # type: ignore[no-untyped-def]
    return (
        db.query(Smoke.map_id.label("map_id"), func.count(Smoke.id).label("smokes_count"))
        .filter(Smoke.deleted_at.is_(None))
        .group_by(Smoke.map_id)
        .subquery()
    )


def _maps_with_counts(db: Session):  # type: ignore[no-untyped-def]
    counts = _visible_smoke_counts(db)
    return db.query(Map, func.coalesce(counts.c.smokes_count, 0)).outerjoin(
        counts, counts.c.map_id == Map.id
    )


def to_map_response(map_: Map, smokes_count: int) -> MapResponse:
    """Convert a Map ORM instance and its visible smoke count to an API schema."""
    return MapResponse(
        id=map_.id,
        name=map_.name,
        description=map_.description,
        thumbnail=map_.thumbnail,
        radar=map_.radar,
        smokes_count=int(smokes_count),
    )


def list_maps(db: Session) -> list[MapResponse]:
    """Return every map with the number of smokes still visible on it."""
    rows = _maps_with_counts(db).order_by(Map.id).all()
    return [to_map_response(map_, count) for map_, count in rows]


def get_map(db: Session, map_id: int) -> MapResponse:
    """Return one map with its visible smoke count.

    Raises:
        NotFoundError: If no map has the given id.
    """
    row = _maps_with_counts(db).filter(Map.id == map_id).first()
    if row is None:
        raise NotFoundError("Map", map_id)
    map_, count = row
    return to_map_response(map_, count)


def require_map(db: Session, map_id: int) -> Map:
    """Return the map ORM row or raise ``NotFoundError``."""
    map_ = db.get(Map, map_id)
    if map_ is None:
        raise NotFoundError("Map", map_id)
    return map_
