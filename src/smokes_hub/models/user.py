# src/smokes_hub/models/user.py
"""SQLAlchemy model for Steam-authenticated users."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smokes_hub.db.session import Base
from smokes_hub.db.time import utcnow

if TYPE_CHECKING:
    from .rating import Rating
    from .report import Report
    from .smoke import Smoke


class User(Base):
    """A player identity keyed by SteamID64."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    steam_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    smokes: Mapped[list[Smoke]] = relationship(
        "Smoke",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    ratings: Mapped[list[Rating]] = relationship(
        "Rating",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reports: Mapped[list[Report]] = relationship(
        "Report",
        back_populates="reporter",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
