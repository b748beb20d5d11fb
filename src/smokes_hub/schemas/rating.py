# src/smokes_hub/schemas/rating.py
"""Rating-related Pydantic schemas."""

from pydantic import Field, StrictInt, field_validator

from smokes_hub.models.rating import RATING_VALUES

from .common import APIModel


class RatingCreate(APIModel):
    """Schema for rating a smoke.

    ``value`` is strict: JSON booleans, floats and numeric strings are refused
    rather than coerced to 1 or -1.
    """

    value: StrictInt = Field(..., description="1 for upvote, -1 for downvote")

    @field_validator("value")
    @classmethod
    def check_direction(cls, value: int) -> int:
        if value not in RATING_VALUES:
            raise ValueError("must be either 1 (upvote) or -1 (downvote)")
        return value
