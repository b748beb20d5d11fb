# tests/v1/test_jwt_validation.py
"""Tests for bearer token validation on protected endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from jose import jwt

from smokes_hub.core.errors import UnauthenticatedError
from smokes_hub.core.security import create_access_token, decode_access_token, subject_to_user_id
from smokes_hub.core.settings import settings
from smokes_hub.models import User


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_expired_token_rejected(client, test_user) -> None:
    token = create_access_token(test_user.id, expires_minutes=-1)

    response = client.get("/auth/me", headers=_bearer(token))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Could not validate credentials"


def test_token_signed_with_other_secret_rejected(client, test_user) -> None:
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": str(test_user.id), "iat": now, "exp": now + timedelta(hours=1)},
        "not-the-secret",
        algorithm=settings.jwt_algorithm,
    )

    response = client.get("/auth/me", headers=_bearer(token))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_garbage_token_rejected(client) -> None:
    response = client.get("/auth/me", headers=_bearer("not.a.jwt"))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_deleted_user_rejected(client, db_session, test_user) -> None:
    token = create_access_token(test_user.id)
    db_session.delete(test_user)
    db_session.commit()

    response = client.get("/auth/me", headers=_bearer(token))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "User not found"
    assert db_session.query(User).count() == 0


def test_decode_roundtrip_and_subject() -> None:
    payload = decode_access_token(create_access_token(42, {"steam_id": "765"}))
    assert subject_to_user_id(payload) == 42
    assert payload["steam_id"] == "765"


@pytest.mark.parametrize("payload", [{}, {"sub": "abc"}])
def test_subject_to_user_id_rejects_bad_subjects(payload) -> None:
    with pytest.raises(UnauthenticatedError):
        subject_to_user_id(payload)
