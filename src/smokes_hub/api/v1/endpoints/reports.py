# src/smokes_hub/api/v1/endpoints/reports.py
"""Moderation report endpoints for the Smokes Hub API."""

from fastapi import APIRouter, status

from smokes_hub.schemas.common import MessageResponse
from smokes_hub.schemas.report import (
    ReportCreate,
    ReportStatusBatchRequest,
    ReportStatusItem,
    ReportStatusResponse,
)
from smokes_hub.services.report_service import (
    create_report,
    get_report_statuses,
    has_user_reported,
)

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(tags=["reports"])


@router.post(
    "/smokes/{smoke_id}/report",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_smoke(
    smoke_id: int,
    report_data: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Flag a smoke for moderator review."""
    create_report(db, current_user.id, smoke_id, report_data.reason)
    return MessageResponse(message="Report submitted successfully")


@router.get("/smokes/{smoke_id}/report/status", response_model=ReportStatusResponse)
async def read_report_status(
    smoke_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReportStatusResponse:
    """Tell the caller whether they already reported a smoke."""
    return ReportStatusResponse(has_reported=has_user_reported(db, current_user.id, smoke_id))


@router.post("/reports/status/batch", response_model=list[ReportStatusItem])
async def read_report_statuses(
    batch: ReportStatusBatchRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[ReportStatusItem]:
    """Report status for several smokes at once, in request order."""
    statuses = get_report_statuses(db, current_user.id, batch.smoke_ids)
    return [
        ReportStatusItem(smoke_id=smoke_id, has_reported=reported)
        for smoke_id, reported in statuses
    ]
