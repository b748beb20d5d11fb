# src/smokes_hub/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .maps import router as maps_router
from .ratings import router as ratings_router
from .reports import router as reports_router
from .smokes import router as smokes_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "maps_router",
    "smokes_router",
    "ratings_router",
    "reports_router",
    "users_router",
]
