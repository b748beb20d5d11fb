"""Tests for identity reconciliation and session tokens."""

from __future__ import annotations

from jose import jwt

from smokes_hub.core.settings import settings
from smokes_hub.models import User
from smokes_hub.services import user_service
from smokes_hub.services.steam import SteamProfile
from smokes_hub.services.user_service import (
    count_users,
    issue_session_token,
    pick_best_avatar,
    reconcile_identity,
)

STEAM_ID = "76561198011112222"


def test_pick_best_avatar_prefers_last_entry() -> None:
    assert pick_best_avatar(["small.jpg", "medium.jpg", "full.jpg"]) == "full.jpg"


def test_pick_best_avatar_skips_empty_entries() -> None:
    assert pick_best_avatar(["small.jpg", "medium.jpg", ""]) == "medium.jpg"
    assert pick_best_avatar(["small.jpg", None]) == "small.jpg"


def test_pick_best_avatar_without_urls() -> None:
    assert pick_best_avatar([]) is None
    assert pick_best_avatar(None) is None
    assert pick_best_avatar(["", None]) is None


def test_reconcile_identity_creates_user(db_session) -> None:
    profile = SteamProfile(
        steam_id=STEAM_ID,
        display_name="Robin",
        username="robinwalker",
        avatar_urls=("s.jpg", "m.jpg", "f.jpg"),
    )

    user = reconcile_identity(db_session, profile)

    assert user.id is not None
    assert user.steam_id == STEAM_ID
    assert user.display_name == "Robin"
    assert user.avatar_url == "f.jpg"
    assert db_session.query(User).count() == 1


def test_reconcile_identity_falls_back_to_username_then_steam_id(db_session) -> None:
    user = reconcile_identity(db_session, SteamProfile(steam_id=STEAM_ID, username="robinwalker"))
    assert user.display_name == "robinwalker"
    assert user.avatar_url is None

    other = reconcile_identity(db_session, SteamProfile(steam_id="76561198033334444"))
    assert other.display_name == "76561198033334444"


def test_reconcile_identity_refreshes_existing_user(db_session) -> None:
    first = reconcile_identity(
        db_session,
        SteamProfile(steam_id=STEAM_ID, display_name="Robin", avatar_urls=("old.jpg",)),
    )
    created_at = first.created_at
    user_id = first.id

    again = reconcile_identity(
        db_session,
        SteamProfile(steam_id=STEAM_ID, display_name="Robin W.", avatar_urls=("a.jpg", "b.jpg")),
    )

    assert again.id == user_id
    assert again.display_name == "Robin W."
    assert again.avatar_url == "b.jpg"
    assert again.created_at == created_at
    assert db_session.query(User).count() == 1


def test_reconcile_identity_recovers_from_concurrent_first_login(db_session, monkeypatch) -> None:
    existing = reconcile_identity(db_session, SteamProfile(steam_id=STEAM_ID, display_name="Robin"))
    existing_id = existing.id
    lookup = user_service.get_user_by_steam_id
    calls = []

    def missed_then_found(db, steam_id):
        calls.append(steam_id)
        return None if len(calls) == 1 else lookup(db, steam_id)

    monkeypatch.setattr(user_service, "get_user_by_steam_id", missed_then_found)

    user = reconcile_identity(
        db_session,
        SteamProfile(steam_id=STEAM_ID, display_name="Robin W.", avatar_urls=("new.jpg",)),
    )

    assert len(calls) == 2
    assert user.id == existing_id
    assert user.display_name == "Robin W."
    assert user.avatar_url == "new.jpg"
    assert db_session.query(User).count() == 1


def test_issue_session_token_claims(test_user) -> None:
    token = issue_session_token(test_user)
    claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

    assert claims["sub"] == str(test_user.id)
    assert claims["steam_id"] == test_user.steam_id
    assert claims["username"] == test_user.display_name
    assert claims["exp"] - claims["iat"] == settings.access_token_expire_minutes * 60


def test_count_users(db_session, test_user, other_user) -> None:
    assert count_users(db_session) == 2
