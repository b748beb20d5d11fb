# src/smokes_hub/models/smoke.py
"""SQLAlchemy model for shared smoke grenade strategies."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smokes_hub.db.session import Base
from smokes_hub.db.time import utcnow

if TYPE_CHECKING:
    from .map import Map
    from .rating import Rating
    from .report import Report
    from .user import User


class Smoke(Base):
    """A single strategy clip pinned to a position on a map.

    The score is never stored; it is the sum of the smoke's ratings and is
    computed when smokes are listed.
    """

    __tablename__ = "smokes"
    __table_args__ = (
        CheckConstraint("timestamp > 0", name="ck_smokes_timestamp_positive"),
        Index("ix_smokes_map_id_deleted_at", "map_id", "deleted_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    # Offset in seconds into the video where the throw starts.
    timestamp: Mapped[int] = mapped_column(Integer, nullable=False)
    x_coord: Mapped[float] = mapped_column(Float, nullable=False)
    y_coord: Mapped[float] = mapped_column(Float, nullable=False)

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    map_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("maps.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    # Soft delete marker; NULL means the smoke is visible.
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    author: Mapped[User] = relationship("User", back_populates="smokes")
    map: Mapped[Map] = relationship("Map", back_populates="smokes")
    ratings: Mapped[list[Rating]] = relationship(
        "Rating",
        back_populates="smoke",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reports: Mapped[list[Report]] = relationship(
        "Report",
        back_populates="smoke",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
