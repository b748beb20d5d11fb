# src/smokes_hub/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import APIModel, ErrorResponse, MessageResponse
from .map import MapResponse, MapSummary
from .rating import RatingCreate
from .report import (
    ReportCreate,
    ReportStatusBatchRequest,
    ReportStatusItem,
    ReportStatusResponse,
)
from .smoke import SmokeCreate, SmokeResponse
from .user import AuthResponse, UserCountResponse, UserResponse

__all__ = [
    "APIModel", "ErrorResponse", "MessageResponse",
    "MapResponse", "MapSummary",
    "RatingCreate",
    "ReportCreate", "ReportStatusBatchRequest", "ReportStatusItem", "ReportStatusResponse",
    "SmokeCreate", "SmokeResponse",
    "AuthResponse", "UserCountResponse", "UserResponse",
]
