# tests/test_seed.py
"""Tests for the database seeding command."""

from __future__ import annotations

from smokes_hub.models import Map, Rating, Report, Smoke, User
from smokes_hub.scripts.seed import (
    DEMO_RATINGS,
    DEMO_REPORTS,
    DEMO_SMOKES,
    DEMO_USERS,
    MAPS,
    seed_demo_content,
    seed_maps,
    wipe_content,
)
from smokes_hub.services.map_service import list_maps


def test_seed_maps_is_idempotent(db_session) -> None:
    seed_maps(db_session)
    seed_maps(db_session)

    names = sorted(name for (name,) in db_session.query(Map.name))
    assert names == sorted(entry["name"] for entry in MAPS)
    assert names == ["Ancient", "Dust2", "Inferno", "Mirage", "Nuke", "Train"]


def test_seed_maps_keeps_existing_rows(db_session) -> None:
    db_session.add(Map(name="Dust2", description="custom"))
    db_session.commit()

    seed_maps(db_session)

    dust2 = db_session.query(Map).filter(Map.name == "Dust2").one()
    assert dust2.description == "custom"


def test_dev_seed_populates_demo_content(db_session) -> None:
    wipe_content(db_session)
    maps = seed_maps(db_session)
    seed_demo_content(db_session, maps)

    assert db_session.query(User).count() == len(DEMO_USERS)
    assert db_session.query(Smoke).count() == len(DEMO_SMOKES)
    assert db_session.query(Rating).count() == len(DEMO_RATINGS)
    assert db_session.query(Report).count() == len(DEMO_REPORTS)

    counts = {item.name: item.smokes_count for item in list_maps(db_session)}
    assert counts["Dust2"] == 2
    assert counts["Train"] == 0
