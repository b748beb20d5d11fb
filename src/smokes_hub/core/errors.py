"""Application error taxonomy.

Services raise these instead of ``HTTPException`` so that they stay usable
outside a request. The boundary layer (``smokes_hub.api.errors``) is the only
place that maps an :class:`ErrorKind` to an HTTP status.
"""
from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced to API clients."""

    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class AppError(Exception):
    """Base class for failures raised by the service layer."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(AppError):
    """Input was malformed or out of range."""

    kind = ErrorKind.VALIDATION


class UnauthenticatedError(AppError):
    """Credentials were missing, invalid or expired."""

    kind = ErrorKind.UNAUTHENTICATED


class ForbiddenError(AppError):
    """The caller is authenticated but not allowed to perform the action."""

    kind = ErrorKind.FORBIDDEN


class NotFoundError(AppError):
    """A referenced entity does not exist (or has been soft-deleted)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, identifier: object, message: str | None = None) -> None:
        super().__init__(message or f"{entity} with ID {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class ConflictError(AppError):
    """The operation would violate a uniqueness rule."""

    kind = ErrorKind.CONFLICT
