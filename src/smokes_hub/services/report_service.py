"""Moderation reports raised by users against smokes."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smokes_hub.core.errors import InvalidInputError
from smokes_hub.db.errors import translate_store_errors
from smokes_hub.models.report import REASON_MAX_LENGTH, REASON_MIN_LENGTH, Report, ReportStatus
from smokes_hub.services.smoke_service import get_visible_smoke
from smokes_hub.services.user_service import require_user

__all__ = [
    "DUPLICATE_REPORT_MESSAGE",
    "create_report",
    "get_report_statuses",
    "has_user_reported",
    "normalize_reason",
]

logger = logging.getLogger(__name__)

DUPLICATE_REPORT_MESSAGE = "You have already reported this smoke"


def normalize_reason(reason: str | None) -> str:
    """Trim a report reason and check its length.

    Raises:
        InvalidInputError: If the trimmed reason is empty, too short or too long.
    """
    trimmed = (reason or "").strip()
    if not trimmed:
        raise InvalidInputError("Report reason cannot be empty")
    if len(trimmed) < REASON_MIN_LENGTH:
        raise InvalidInputError(
            f"Report reason must be at least {REASON_MIN_LENGTH} characters long"
        )
    if len(trimmed) > REASON_MAX_LENGTH:
        raise InvalidInputError(
            f"Report reason must not exceed {REASON_MAX_LENGTH} characters"
        )
    return trimmed


def _find_report(db: Session, reporter_id: int, smoke_id: int) -> Report | None:
    return db.query(Report).filter(
        Report.reporter_id == reporter_id,
        Report.smoke_id == smoke_id,
    ).first()


def create_report(db: Session, reporter_id: int, smoke_id: int, reason: str | None) -> Report:
    """File a PENDING report for a smoke.

    Each user can report a given smoke once. A second attempt, including one
    that loses a race against the unique constraint, fails with the same error.

    Raises:
        InvalidInputError: On an invalid reason or a duplicate report.
        NotFoundError: If the smoke is missing or deleted, or the reporter is missing.
    """
    trimmed = normalize_reason(reason)

    with translate_store_errors(db):
        get_visible_smoke(db, smoke_id, for_update=True)
        require_user(db, reporter_id)
        if _find_report(db, reporter_id, smoke_id) is not None:
            raise InvalidInputError(DUPLICATE_REPORT_MESSAGE)

        report = Report(
            reporter_id=reporter_id,
            smoke_id=smoke_id,
            reason=trimmed,
            status=ReportStatus.PENDING,
        )
        db.add(report)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if _find_report(db, reporter_id, smoke_id) is None:
                raise
            raise InvalidInputError(DUPLICATE_REPORT_MESSAGE) from exc
        db.refresh(report)

    logger.info("User %s reported smoke %s (report %s)", reporter_id, smoke_id, report.id)
    return report


def has_user_reported(db: Session, reporter_id: int, smoke_id: int) -> bool:
    """Return True if the user already reported the smoke."""
    return _find_report(db, reporter_id, smoke_id) is not None


def get_report_statuses(
    db: Session,
    reporter_id: int,
    smoke_ids: Sequence[int],
) -> list[tuple[int, bool]]:
    """Return ``(smoke_id, has_reported)`` pairs in the order requested."""
    if not smoke_ids:
        return []
    reported = {
        smoke_id
        for (smoke_id,) in db.query(Report.smoke_id).filter(
            Report.reporter_id == reporter_id,
            Report.smoke_id.in_(set(smoke_ids)),
        )
    }
    return [(smoke_id, smoke_id in reported) for smoke_id in smoke_ids]
