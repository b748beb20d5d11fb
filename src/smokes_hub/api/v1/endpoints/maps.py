"""Map catalog endpoints."""

from fastapi import APIRouter

from smokes_hub.schemas.map import MapResponse
from smokes_hub.schemas.smoke import SmokeResponse
from smokes_hub.services.map_service import get_map, list_maps
from smokes_hub.services.smoke_service import list_smokes_for_map

from ..dependencies import SessionDep

router = APIRouter(prefix="/maps", tags=["maps"])


@router.get("", response_model=list[MapResponse])
async def read_maps(db: SessionDep) -> list[MapResponse]:
    """List every map with its number of visible smokes."""
    return list_maps(db)


@router.get("/{map_id}", response_model=MapResponse)
async def read_map(map_id: int, db: SessionDep) -> MapResponse:
    """Return a single map."""
    return get_map(db, map_id)


@router.get("/{map_id}/smokes", response_model=list[SmokeResponse])
async def read_map_smokes(map_id: int, db: SessionDep) -> list[SmokeResponse]:
    """List a map's smokes, best rated first."""
    return list_smokes_for_map(db, map_id)
