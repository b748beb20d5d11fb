# src/smokes_hub/scripts/seed.py
"""Seed the map catalog, and optionally demo content for local development.

Usage:
    smokes-hub-seed            # upsert the six reference maps by name
    smokes-hub-seed --dev      # wipe content, then add maps, demo users, smokes,
                               # ratings and reports
"""

from __future__ import annotations

import argparse
import logging
from typing import Any

from sqlalchemy.orm import Session

from smokes_hub.core.logging import configure_logging
from smokes_hub.db.session import SessionLocal, create_tables
from smokes_hub.models import Map, Rating, Report, ReportStatus, Smoke, User

logger = logging.getLogger(__name__)

MAPS: list[dict[str, str]] = [
    {
        "name": "Dust2",
        "radar": "/images/maps/map_dust2.webp",
        "thumbnail": "https://static.wikia.nocookie.net/cswikia/images/1/16/Cs2_dust2.png",
        "description": (
            "The classic. Two bombsites joined by a central route. Built for fast duels "
            "and straightforward play."
        ),
    },
    {
        "name": "Mirage",
        "radar": "/images/maps/map_mirage.webp",
        "thumbnail": "https://static.wikia.nocookie.net/cswikia/images/f/f5/De_mirage_cs2.png",
        "description": (
            "Iconic and balanced. A desert town with clear routes that suits any play style."
        ),
    },
    {
        "name": "Inferno",
        "radar": "/images/maps/map_inferno.webp",
        "thumbnail": "https://static.wikia.nocookie.net/cswikia/images/1/17/Cs2_inferno_remake.png",
        "description": (
            "An Italian village. Narrow streets and corridors reward grenade-heavy tactics "
            "and close fights."
        ),
    },
    {
        "name": "Ancient",
        "radar": "/images/maps/map_ancient.webp",
        "thumbnail": "https://static.wikia.nocookie.net/cswikia/images/5/5c/De_ancient_cs2.png",
        "description": (
            "Jungle ruins. Uneven ground and far-apart bombsites demand map control and "
            "careful utility."
        ),
    },
    {
        "name": "Nuke",
        "radar": "/images/maps/map_nuke.webp",
        "thumbnail": "https://static.wikia.nocookie.net/cswikia/images/d/d6/De_nuke_cs2.png",
        "description": (
            "A nuclear plant with stacked bombsites on different floors. Known for its "
            "verticality and wallbangs."
        ),
    },
    {
        "name": "Train",
        "radar": "/images/maps/map_train.webp",
        "thumbnail": "https://static.wikia.nocookie.net/cswikia/images/2/2c/De_train_cs2_new.png",
        "description": (
            "A rail yard maze of carriages and tracks, good for flanks and coordinated "
            "team plays."
        ),
    },
]

DEMO_AVATAR = (
    "https://steamcdn-a.akamaihd.net/steamcommunity/public/images/avatars/fe/"
    "fef49e7fa7e1997310d705b2a6158ff8dc1cdfeb_full.jpg"
)

DEMO_USERS: list[dict[str, Any]] = [
    {"steam_id": "76561198000000001", "display_name": "TestPlayer1"},
    {"steam_id": "76561198000000002", "display_name": "SmokeExpert"},
    {"steam_id": "76561198000000003", "display_name": "CS2Pro"},
]

# (title, video id, timestamp, x, y, author index, map name)
DEMO_SMOKES: list[tuple[str, str, int, float, float, int, str]] = [
    ("Xbox Smoke from Long", "example1", 15, 1024.5, 768.2, 0, "Dust2"),
    ("CT Smoke from Tunnels", "example2", 22, 512.8, 1024.1, 1, "Dust2"),
    ("Connector Smoke from Palace", "example3", 18, 800.3, 600.7, 0, "Mirage"),
    ("Jungle Smoke from Ramp", "example4", 25, 900.1, 450.9, 2, "Mirage"),
    ("Balcony Smoke from Apartments", "example5", 20, 700.5, 800.3, 1, "Inferno"),
]

# (user index, smoke index, value)
DEMO_RATINGS: list[tuple[int, int, int]] = [
    (1, 0, 1),
    (2, 0, 1),
    (0, 1, -1),
    (2, 1, 1),
    (1, 2, 1),
    (2, 3, 1),
    (0, 4, 1),
]

# (reporter index, smoke index, reason)
DEMO_REPORTS: list[tuple[int, int, str]] = [
    (2, 1, "This smoke lineup is outdated and no longer works in the current version of CS2."),
    (0, 3, "The video contains inappropriate content that violates community guidelines."),
]


def seed_maps(db: Session) -> dict[str, Map]:
    """Create any missing reference maps. Existing maps are left untouched."""
    existing = {map_.name: map_ for map_ in db.query(Map).all()}
    for entry in MAPS:
        if entry["name"] in existing:
            continue
        map_ = Map(**entry)
        db.add(map_)
        existing[entry["name"]] = map_
        logger.info("Created map %s", entry["name"])
    db.commit()
    return existing


def wipe_content(db: Session) -> None:
    """Delete all users, smokes, ratings and reports. Maps are kept."""
    for model in (Report, Rating, Smoke, User):
        db.query(model).delete(synchronize_session=False)
    db.commit()
    logger.info("Removed existing content")


def seed_demo_content(db: Session, maps: dict[str, Map]) -> None:
    """Add demo users, smokes, ratings and reports."""
    users = [User(avatar_url=DEMO_AVATAR, **fields) for fields in DEMO_USERS]
    db.add_all(users)
    db.flush()

    smokes = [
        Smoke(
            title=title,
            video_url=f"https://www.youtube.com/watch?v={video_id}",
            timestamp=timestamp,
            x_coord=x_coord,
            y_coord=y_coord,
            author_id=users[author].id,
            map_id=maps[map_name].id,
        )
        for title, video_id, timestamp, x_coord, y_coord, author, map_name in DEMO_SMOKES
    ]
    db.add_all(smokes)
    db.flush()

    db.add_all(
        Rating(user_id=users[user].id, smoke_id=smokes[smoke].id, value=value)
        for user, smoke, value in DEMO_RATINGS
    )
    db.add_all(
        Report(
            reporter_id=users[reporter].id,
            smoke_id=smokes[smoke].id,
            reason=reason,
            status=ReportStatus.PENDING,
        )
        for reporter, smoke, reason in DEMO_REPORTS
    )
    db.commit()
    logger.info(
        "Seeded %d users, %d smokes, %d ratings and %d reports",
        len(users),
        len(smokes),
        len(DEMO_RATINGS),
        len(DEMO_REPORTS),
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the Smokes Hub database")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Replace all content with demo users, smokes, ratings and reports.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (for SQLite development databases).",
    )
    args = parser.parse_args(argv)

    configure_logging()
    if args.create_tables:
        create_tables()

    db = SessionLocal()
    try:
        if args.dev:
            wipe_content(db)
        maps = seed_maps(db)
        if args.dev:
            seed_demo_content(db, maps)
    finally:
        db.close()
    print("[seed] done")


if __name__ == "__main__":
    main()
