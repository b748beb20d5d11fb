"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from smokes_hub.core.errors import UnauthenticatedError
from smokes_hub.core.security import decode_access_token, subject_to_user_id
from smokes_hub.db.session import get_db
from smokes_hub.models import User
from smokes_hub.services.steam import SteamOpenIDClient, get_steam_client
from smokes_hub.services.user_service import get_user

# Missing credentials are reported through the error envelope rather than
# FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        UnauthenticatedError: If the token is missing, invalid, expired or
            names a user that no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Authentication required")

    payload = decode_access_token(credentials.credentials)
    user = get_user(db, subject_to_user_id(payload))
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


def get_steam_client_dep() -> SteamOpenIDClient:
    """Return the shared Steam OpenID client."""
    return get_steam_client()


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
SteamClientDep = Annotated[SteamOpenIDClient, Depends(get_steam_client_dep)]
