# src/smokes_hub/models/map.py
"""SQLAlchemy model for the static map catalog."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smokes_hub.db.session import Base
from smokes_hub.db.time import utcnow

if TYPE_CHECKING:
    from .smoke import Smoke


class Map(Base):
    """Reference data seeded by administrators; never created through the API."""

    __tablename__ = "maps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Top-down overview image used by the frontend to place smokes.
    radar: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    smokes: Mapped[list[Smoke]] = relationship(
        "Smoke",
        back_populates="map",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
