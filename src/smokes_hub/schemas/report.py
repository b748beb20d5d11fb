"""Report-related Pydantic schemas."""

from typing import Annotated

from pydantic import Field, StringConstraints

from smokes_hub.models.report import REASON_MAX_LENGTH, REASON_MIN_LENGTH

from .common import APIModel

ReportReason = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=REASON_MIN_LENGTH,
        max_length=REASON_MAX_LENGTH,
    ),
]


class ReportCreate(APIModel):
    """Schema for reporting a smoke to moderators."""

    reason: ReportReason = Field(..., description="Why the smoke should be reviewed")


class ReportStatusResponse(APIModel):
    """Whether the caller has already reported a smoke."""

    has_reported: bool


class ReportStatusBatchRequest(APIModel):
    """Smoke ids to look up report status for."""

    smoke_ids: list[int] = Field(..., max_length=200, description="Smoke identifiers")


class ReportStatusItem(APIModel):
    """Report status for a single smoke."""

    smoke_id: int
    has_reported: bool
