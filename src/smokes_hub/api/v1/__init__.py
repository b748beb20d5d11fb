# src/smokes_hub/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    maps_router,
    ratings_router,
    reports_router,
    smokes_router,
    users_router,
)

__all__ = [
    "auth_router",
    "maps_router",
    "smokes_router",
    "ratings_router",
    "reports_router",
    "users_router",
]
