"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from .common import APIModel


class UserResponse(APIModel):
    """Public profile of a user."""

    id: int
    steam_id: str = Field(..., description="SteamID64 of the player")
    display_name: str = Field(..., description="Steam persona name at last login")
    avatar_url: str | None = Field(None, description="Largest available Steam avatar")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(APIModel):
    """Returned by the Steam callback once the user is reconciled."""

    message: str = Field("Authentication successful")
    token: str = Field(..., description="JWT bearer token")
    user: UserResponse


class UserCountResponse(APIModel):
    """Total number of registered users."""

    count: int
