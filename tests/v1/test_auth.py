# tests/v1/test_auth.py
"""Tests for the Steam login endpoints."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import httpx
from fastapi import status
from jose import jwt

from smokes_hub.core.settings import settings
from smokes_hub.models import User

STEAM_ID = "76561197960287930"


def _callback_params(**overrides: str) -> dict[str, str]:
    params = {
        "openid.ns": "http://specs.openid.net/auth/2.0",
        "openid.mode": "id_res",
        "openid.claimed_id": f"https://steamcommunity.com/openid/id/{STEAM_ID}",
        "openid.identity": f"https://steamcommunity.com/openid/id/{STEAM_ID}",
        "openid.return_to": "http://test/auth/steam/return",
        "openid.signed": "signed,claimed_id,identity,return_to",
        "openid.sig": "c2lnbmF0dXJl",
    }
    params.update(overrides)
    return params


def _steam_handler(persona: str = "Robin", is_valid: bool = True):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/openid/login":
            return httpx.Response(200, text=f"is_valid:{'true' if is_valid else 'false'}\n")
        return httpx.Response(
            200,
            json={
                "response": {
                    "players": [
                        {
                            "steamid": STEAM_ID,
                            "personaname": persona,
                            "avatar": "https://avatars.example/small.jpg",
                            "avatarmedium": "https://avatars.example/medium.jpg",
                            "avatarfull": "https://avatars.example/full.jpg",
                        }
                    ]
                }
            },
        )

    return handler


def test_steam_login_redirects(client, override_steam_client) -> None:
    override_steam_client(_steam_handler())

    response = client.get("/auth/steam", follow_redirects=False)

    assert response.status_code == status.HTTP_302_FOUND
    location = urlsplit(response.headers["location"])
    assert location.netloc == "steamcommunity.com"
    assert parse_qs(location.query)["openid.mode"] == ["checkid_setup"]


def test_steam_return_creates_user_and_token(client, db_session, override_steam_client) -> None:
    override_steam_client(_steam_handler())

    response = client.get("/auth/steam/return", params=_callback_params())

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"] == "Authentication successful"
    assert body["user"]["steamId"] == STEAM_ID
    assert body["user"]["displayName"] == "Robin"
    assert body["user"]["avatarUrl"] == "https://avatars.example/full.jpg"

    claims = jwt.decode(body["token"], settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert claims["sub"] == str(body["user"]["id"])
    assert claims["steam_id"] == STEAM_ID
    assert claims["username"] == "Robin"


def test_steam_return_refreshes_returning_user(client, db_session, override_steam_client) -> None:
    override_steam_client(_steam_handler("Robin"))
    first = client.get("/auth/steam/return", params=_callback_params()).json()

    override_steam_client(_steam_handler("Robin W."))
    second = client.get("/auth/steam/return", params=_callback_params()).json()

    assert second["user"]["id"] == first["user"]["id"]
    assert second["user"]["displayName"] == "Robin W."
    assert db_session.query(User).count() == 1


def test_steam_return_rejected_assertion(client, db_session, override_steam_client) -> None:
    override_steam_client(_steam_handler(is_valid=False))

    response = client.get("/auth/steam/return", params=_callback_params())

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Steam authentication failed"
    assert db_session.query(User).count() == 0


def test_steam_return_cancelled_login(client, override_steam_client) -> None:
    override_steam_client(_steam_handler())

    response = client.get("/auth/steam/return", params={"openid.mode": "cancel"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_returns_profile(client, test_user, auth_headers) -> None:
    response = client.get("/auth/me", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == test_user.id
    assert body["steamId"] == test_user.steam_id
    assert body["displayName"] == "Test Player"


def test_me_requires_token(client) -> None:
    response = client.get("/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["statusCode"] == 401
