"""Map-related Pydantic schemas."""

from pydantic import ConfigDict, Field

from .common import APIModel


class MapSummary(APIModel):
    """Public map fields embedded in smoke listings."""

    id: int
    name: str
    thumbnail: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MapResponse(APIModel):
    """Map catalog entry."""

    id: int
    name: str
    description: str | None = None
    thumbnail: str | None = None
    radar: str | None = None
    smokes_count: int = Field(0, description="Number of visible smokes on the map")

    model_config = ConfigDict(from_attributes=True)
