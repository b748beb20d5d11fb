"""HTTP error boundary.

Every non-2xx response leaves the API in the same envelope::

    {"statusCode": 404, "message": "...", "error": "Not Found",
     "timestamp": "2024-01-01T00:00:00.000Z", "path": "/maps/99"}

``message`` is a list of strings for request validation failures and a plain
string otherwise.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smokes_hub.core.errors import AppError, ErrorKind
from smokes_hub.db.errors import StoreError, StoreErrorKind
from smokes_hub.db.time import isoformat_z
from smokes_hub.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

STORE_KIND_RESPONSE: dict[StoreErrorKind, tuple[int, str]] = {
    StoreErrorKind.FOREIGN_KEY_VIOLATION: (
        status.HTTP_400_BAD_REQUEST,
        "Invalid reference to related record",
    ),
    StoreErrorKind.NOT_NULL_VIOLATION: (
        status.HTTP_400_BAD_REQUEST,
        "Required relation is missing",
    ),
    StoreErrorKind.CHECK_VIOLATION: (status.HTTP_400_BAD_REQUEST, "Invalid data provided"),
    StoreErrorKind.CONNECTION: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Database connection error",
    ),
    StoreErrorKind.OTHER: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed"),
}

INTERNAL_ERROR_MESSAGE = "Internal server error"

_FIELD_MESSAGE_RE = re.compile(r"^(\w+)\s+(must|should|cannot|is|has)\s+(.+)$")
_SUBJECT_WORDS = ("Input", "String", "Value", "List")
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def _request_path(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def build_error_body(status_code: int, message: str | list[str], path: str) -> dict[str, Any]:
    """Return the JSON envelope for an error response."""
    envelope = ErrorResponse(
        status_code=status_code,
        message=message,
        error=HTTPStatus(status_code).phrase,
        timestamp=isoformat_z(),
        path=path,
    )
    return envelope.model_dump(by_alias=True)


def aggregate_validation_messages(messages: Iterable[str]) -> list[str]:
    """Group ``"<field> <verb> <detail>"`` messages into one line per field.

    Messages that do not follow that shape are appended unchanged after the
    grouped ones.
    """
    grouped: dict[str, list[str]] = {}
    general: list[str] = []
    for message in messages:
        match = _FIELD_MESSAGE_RE.match(message)
        if match is None:
            general.append(message)
            continue
        field, verb, detail = match.groups()
        grouped.setdefault(field, []).append(f"{verb} {detail}")
    return [f"{field}: {', '.join(parts)}" for field, parts in grouped.items()] + general


def _field_name(loc: Sequence[Any]) -> str:
    names = [str(part) for part in loc if isinstance(part, str)]
    fields = [name for name in names if name not in _LOCATION_ROOTS]
    if fields:
        return fields[-1]
    return names[-1] if names else "request"


def render_validation_error(error: Mapping[str, Any]) -> str:
    """Render one pydantic error as ``"<field> <detail>"``."""
    field = _field_name(error.get("loc", ()))
    if error.get("type") == "missing":
        return f"{field} is required"

    message = str(error.get("msg", "is invalid"))
    message = message.removeprefix("Value error, ")
    first, _, rest = message.partition(" ")
    if first in _SUBJECT_WORDS and rest:
        return f"{field} {rest}"
    return f"{field} {message}"


def _respond(
    request: Request,
    status_code: int,
    message: str | list[str],
    exc: BaseException,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    client = request.client.host if request.client else "unknown"
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Server error %s on %s %s from %s: %s",
            status_code,
            request.method,
            request.url.path,
            client,
            message,
            exc_info=exc,
        )
    else:
        logger.warning(
            "Client error %s on %s %s from %s: %s",
            status_code,
            request.method,
            request.url.path,
            client,
            message,
        )
    return JSONResponse(
        status_code=status_code,
        content=build_error_body(status_code, message, _request_path(request)),
        headers=dict(headers) if headers else None,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map service-layer errors to their HTTP status."""
    status_code = KIND_STATUS[exc.kind]
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHENTICATED else None
    return _respond(request, status_code, exc.message, exc, headers)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Map store failures to a status without leaking driver detail."""
    if exc.kind is StoreErrorKind.UNIQUE_VIOLATION:
        field = exc.target[0] if exc.target else "field"
        return _respond(
            request,
            status.HTTP_409_CONFLICT,
            f"A record with this {field} already exists",
            exc,
        )
    status_code, message = STORE_KIND_RESPONSE[exc.kind]
    return _respond(request, status_code, message, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed requests with 400 and per-field messages."""
    rendered = [render_validation_error(error) for error in exc.errors()]
    return _respond(
        request,
        status.HTTP_400_BAD_REQUEST,
        aggregate_validation_messages(rendered),
        exc,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown routes, bad methods) in the envelope."""
    detail = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return _respond(request, exc.status_code, detail, exc, exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything the other handlers did not claim."""
    return _respond(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        exc,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StoreError, store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
