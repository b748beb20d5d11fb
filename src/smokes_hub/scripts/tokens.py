# src/smokes_hub/scripts/tokens.py
"""
Mint a session token for an existing user.

Handy for exercising protected endpoints locally without going through the
Steam login:

    smokes-hub-token 1
    curl -H "Authorization: Bearer $(smokes-hub-token 1)" localhost:3000/auth/me
"""

from __future__ import annotations

import argparse
import sys

from smokes_hub.db.session import SessionLocal
from smokes_hub.services.user_service import get_user, issue_session_token


def mint_token(user_id: int) -> str | None:
    """Return a token for ``user_id`` or ``None`` if the user does not exist."""
    db = SessionLocal()
    try:
        user = get_user(db, user_id)
        if user is None:
            return None
        return issue_session_token(user)
    finally:
        db.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print a session token for a user")
    parser.add_argument("user_id", type=int, help="Internal user id")
    args = parser.parse_args(argv)

    token = mint_token(args.user_id)
    if token is None:
        print(f"[tokens] user {args.user_id} not found", file=sys.stderr)
        sys.exit(1)
    print(token)


if __name__ == "__main__":
    main()
