# src/smokes_hub/models/rating.py
"""Models capturing up/down ratings on smokes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smokes_hub.db.session import Base
from smokes_hub.db.time import utcnow

if TYPE_CHECKING:
    from .smoke import Smoke
    from .user import User

RATING_UP = 1
RATING_DOWN = -1
RATING_VALUES = (RATING_UP, RATING_DOWN)


class Rating(Base):
    """Per-user vote on a smoke.

    The unique (user_id, smoke_id) pair is what upserts conflict on, so a user
    only ever holds their current vote.
    """

    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_ratings_value"),
        UniqueConstraint("user_id", "smoke_id", name="uq_ratings_user_id_smoke_id"),
        Index("ix_ratings_smoke_id", "smoke_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    smoke_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("smokes.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="ratings")
    smoke: Mapped[Smoke] = relationship("Smoke", back_populates="ratings")
