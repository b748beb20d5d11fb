# src/smokes_hub/schemas/smoke.py
"""Smoke-related Pydantic schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, HttpUrl

from .common import APIModel
from .map import MapSummary
from .user import UserResponse


class SmokeCreate(APIModel):
    """Schema for sharing a new smoke strategy.

    The author is never part of the payload; it is taken from the bearer token.
    Coordinates keep their snake_case wire names.
    """

    title: str = Field(..., min_length=1, max_length=100, description="Smoke title")
    video_url: HttpUrl = Field(..., description="Demonstration video URL")
    timestamp: int = Field(..., gt=0, description="Offset in seconds within the video")
    x_coord: float = Field(
        ..., alias="x_coord", allow_inf_nan=False, description="X coordinate on the map radar"
    )
    y_coord: float = Field(
        ..., alias="y_coord", allow_inf_nan=False, description="Y coordinate on the map radar"
    )
    map_id: int = Field(..., gt=0, description="Target map identifier")


class SmokeResponse(APIModel):
    """Smoke with its derived score, author profile and map."""

    id: int
    title: str
    video_url: str
    timestamp: int
    x_coord: float = Field(..., alias="x_coord")
    y_coord: float = Field(..., alias="y_coord")
    score: int = Field(0, description="Sum of all ratings (+1/-1)")
    created_at: datetime
    updated_at: datetime
    author: UserResponse
    map: MapSummary

    model_config = ConfigDict(from_attributes=True)
