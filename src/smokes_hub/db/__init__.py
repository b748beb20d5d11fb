# src/smokes_hub/db/__init__.py
"""Database configuration and utilities."""

from .errors import StoreError, StoreErrorKind, translate_store_errors
from .session import SessionLocal, get_db

__all__ = [
    "get_db",
    "SessionLocal",
    "StoreError",
    "StoreErrorKind",
    "translate_store_errors",
]
