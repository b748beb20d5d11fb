# src/smokes_hub/api/v1/endpoints/auth.py
"""Steam login endpoints for the Smokes Hub API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from smokes_hub.core.errors import UnauthenticatedError
from smokes_hub.schemas.user import AuthResponse, UserResponse
from smokes_hub.services.steam import SteamAuthError
from smokes_hub.services.user_service import issue_session_token, reconcile_identity

from ..dependencies import CurrentUserDep, SessionDep, SteamClientDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/steam", status_code=status.HTTP_302_FOUND)
async def steam_login(steam: SteamClientDep) -> RedirectResponse:
    """Send the browser to Steam's OpenID login page."""
    return RedirectResponse(steam.build_login_url(), status_code=status.HTTP_302_FOUND)


@router.get("/steam/return", response_model=AuthResponse)
async def steam_return(request: Request, steam: SteamClientDep, db: SessionDep) -> AuthResponse:
    """Verify Steam's assertion, reconcile the user and issue a session token."""
    try:
        profile = await steam.authenticate(request.query_params)
    except SteamAuthError as exc:
        logger.warning("Steam login failed: %s", exc)
        raise UnauthenticatedError("Steam authentication failed") from exc

    user = reconcile_identity(db, profile)
    return AuthResponse(
        token=issue_session_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(current_user)
