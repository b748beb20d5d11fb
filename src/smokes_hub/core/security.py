"""Session token helpers built on python-jose."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from smokes_hub.core.errors import UnauthenticatedError
from smokes_hub.core.settings import settings


def create_access_token(
    subject: int | str,
    extra_claims: dict[str, Any] | None = None,
    *,
    expires_minutes: int | None = None,
) -> str:
    """Create a signed JWT access token.

    Args:
        subject: Internal user identifier, stored as the ``sub`` claim.
        extra_claims: Additional public claims (e.g. Steam ID, username).
        expires_minutes: Override for the configured token lifetime.

    Returns:
        The encoded token.
    """
    now = datetime.now(UTC)
    lifetime = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    to_encode: dict[str, Any] = {"sub": str(subject), "iat": now}
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = now + timedelta(minutes=lifetime)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify a token's signature and expiry and return its claims.

    Raises:
        UnauthenticatedError: If the token is malformed, expired or forged.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise UnauthenticatedError("Could not validate credentials") from err
    return payload


def subject_to_user_id(payload: dict[str, Any]) -> int:
    """Extract the internal user id from decoded claims."""
    subject = payload.get("sub")
    if subject is None:
        raise UnauthenticatedError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise UnauthenticatedError("Could not validate credentials") from err
