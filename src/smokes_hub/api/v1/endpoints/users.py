"""Public user directory endpoints."""

from fastapi import APIRouter

from smokes_hub.schemas.user import UserCountResponse
from smokes_hub.services.user_service import count_users

from ..dependencies import SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/count", response_model=UserCountResponse)
async def get_user_count(db: SessionDep) -> UserCountResponse:
    """Return how many players have signed in at least once."""
    return UserCountResponse(count=count_users(db))
