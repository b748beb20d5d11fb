# src/smokes_hub/api/v1/endpoints/ratings.py
"""Rating endpoints for the Smokes Hub API."""

from fastapi import APIRouter

from smokes_hub.schemas.common import MessageResponse
from smokes_hub.schemas.rating import RatingCreate
from smokes_hub.services.rating_service import get_user_ratings, remove_rating, upsert_rating

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(tags=["ratings"])


@router.post("/smokes/{smoke_id}/rate", response_model=MessageResponse)
async def rate_smoke(
    smoke_id: int,
    rating_data: RatingCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Upvote or downvote a smoke, replacing any earlier vote by the caller."""
    upsert_rating(db, current_user.id, smoke_id, rating_data.value)
    return MessageResponse(message="Rating submitted successfully")


@router.delete("/smokes/{smoke_id}/rate", response_model=MessageResponse)
async def unrate_smoke(
    smoke_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Withdraw the caller's vote on a smoke."""
    remove_rating(db, current_user.id, smoke_id)
    return MessageResponse(message="Rating removed successfully")


@router.get("/ratings/me", response_model=dict[int, int])
async def read_my_ratings(current_user: CurrentUserDep, db: SessionDep) -> dict[int, int]:
    """Return the caller's votes keyed by smoke id."""
    return get_user_ratings(db, current_user.id)
