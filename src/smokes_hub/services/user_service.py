"""Identity reconciliation and session issuance for Steam users."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smokes_hub.core.errors import NotFoundError
from smokes_hub.core.security import create_access_token
from smokes_hub.db.errors import translate_store_errors
from smokes_hub.models.user import User
from smokes_hub.services.steam import SteamProfile

__all__ = [
    "pick_best_avatar",
    "reconcile_identity",
    "issue_session_token",
    "get_user",
    "require_user",
    "get_user_by_steam_id",
    "count_users",
]

logger = logging.getLogger(__name__)


def pick_best_avatar(urls: Sequence[str | None] | None) -> str | None:
    """Return the highest resolution avatar from a small-to-large sequence.

    Empty entries are skipped; ``None`` is returned when nothing usable remains.
    """
    if not urls:
        return None
    for url in reversed(urls):
        if url:
            return url
    return None


def _display_name_for(profile: SteamProfile) -> str:
    return profile.display_name or profile.username or profile.steam_id


def _apply_profile(user: User, profile: SteamProfile) -> None:
    user.display_name = _display_name_for(profile)
    user.avatar_url = pick_best_avatar(profile.avatar_urls)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def require_user(db: Session, user_id: int) -> User:
    """Return a user or raise ``NotFoundError``."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def get_user_by_steam_id(db: Session, steam_id: str) -> User | None:
    """Return the user linked to a SteamID64, if any."""
    return db.query(User).filter(User.steam_id == steam_id).first()


def reconcile_identity(db: Session, profile: SteamProfile) -> User:
    """Create or refresh the local user for a verified Steam profile.

    New users get the profile's display name and best avatar. Returning users
    have both fields overwritten with the fresh values; nothing else changes.
    """
    with translate_store_errors(db):
        user = get_user_by_steam_id(db, profile.steam_id)
        if user is None:
            user = User(steam_id=profile.steam_id)
            _apply_profile(user, profile)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # Another first login for the same Steam ID won the insert.
                db.rollback()
                user = get_user_by_steam_id(db, profile.steam_id)
                if user is None:
                    raise
                _apply_profile(user, profile)
                db.commit()
            else:
                logger.info("Registered user %s for Steam ID %s", user.id, profile.steam_id)
        else:
            _apply_profile(user, profile)
            db.commit()
        db.refresh(user)
    return user


def issue_session_token(user: User) -> str:
    """Mint the bearer token handed back after a successful login."""
    return create_access_token(
        user.id,
        {"steam_id": user.steam_id, "username": user.display_name},
    )


def count_users(db: Session) -> int:
    """Return the total number of registered users."""
    return db.query(User).count()
