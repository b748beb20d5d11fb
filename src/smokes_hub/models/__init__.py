# src/smokes_hub/models/__init__.py
"""SQLAlchemy models for the Smokes Hub application."""

from .map import Map
from .rating import Rating
from .report import Report, ReportStatus
from .smoke import Smoke
from .user import User

__all__ = [
    "Map",
    "Rating",
    "Report", "ReportStatus",
    "Smoke",
    "User",
]
