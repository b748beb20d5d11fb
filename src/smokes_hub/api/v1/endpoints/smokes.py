# src/smokes_hub/api/v1/endpoints/smokes.py
"""Smoke sharing endpoints for the Smokes Hub API."""

from fastapi import APIRouter, Response, status

from smokes_hub.schemas.smoke import SmokeCreate, SmokeResponse
from smokes_hub.services.smoke_service import create_smoke, delete_smoke

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/smokes", tags=["smokes"])


@router.post("", response_model=SmokeResponse, status_code=status.HTTP_201_CREATED)
async def share_smoke(
    smoke_data: SmokeCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SmokeResponse:
    """Share a new smoke on a map. The caller becomes its author."""
    return create_smoke(db, smoke_data, current_user)


@router.delete("/{smoke_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_smoke(
    smoke_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Soft-delete one of the caller's smokes."""
    delete_smoke(db, smoke_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
