# src/smokes_hub/models/report.py
"""Models tracking user reports against smokes."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smokes_hub.db.session import Base
from smokes_hub.db.time import utcnow

if TYPE_CHECKING:
    from .smoke import Smoke
    from .user import User

REASON_MIN_LENGTH = 10
REASON_MAX_LENGTH = 500


class ReportStatus(str, enum.Enum):
    """Review lifecycle of a report. New reports always start as PENDING."""

    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


class Report(Base):
    """A moderation flag raised by one user against one smoke."""

    __tablename__ = "reports"
    __table_args__ = (
        UniqueConstraint("reporter_id", "smoke_id", name="uq_reports_reporter_id_smoke_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reason: Mapped[str] = mapped_column(String(REASON_MAX_LENGTH), nullable=False)
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus, name="report_status"),
        nullable=False,
        default=ReportStatus.PENDING,
    )

    reporter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    smoke_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("smokes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    reporter: Mapped[User] = relationship("User", back_populates="reports")
    smoke: Mapped[Smoke] = relationship("Smoke", back_populates="reports")
