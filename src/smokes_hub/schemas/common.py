"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(APIModel):
    """Acknowledgement returned by write endpoints that produce no resource."""

    message: str = Field(..., description="Human-readable outcome")


class ErrorResponse(APIModel):
    """Uniform error envelope returned on every non-2xx response."""

    status_code: int = Field(..., description="HTTP status code")
    message: str | list[str] = Field(
        ...,
        description="Error message, or one entry per field for validation failures",
    )
    error: str = Field(..., description="HTTP reason phrase for the status code")
    timestamp: str = Field(..., description="ISO-8601 time the error was produced")
    path: str = Field(..., description="Request path that failed")
