# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STEAM_API_KEY", "test-steam-key")

from smokes_hub.api.v1.dependencies import get_steam_client_dep
from smokes_hub.db.session import Base, build_engine
from smokes_hub.db.session import get_db as app_get_session
from smokes_hub.main import app as fastapi_app
from smokes_hub.models import Map, Smoke, User
from smokes_hub.services.steam import SteamConfig, SteamOpenIDClient
from smokes_hub.services.user_service import issue_session_token

TEST_DB_URL = "sqlite://"

STEAM_TEST_CONFIG = SteamConfig(
    api_key="test-steam-key",
    realm="http://test",
    return_url="http://test/auth/steam/return",
    timeout_seconds=5.0,
)

_STEAM_ID_COUNTER = count(76561198000000001)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so wipe every table between tests.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_user(db: Session, display_name: str, avatar_url: str | None = None) -> User:
    user = User(
        steam_id=str(next(_STEAM_ID_COUNTER)),
        display_name=display_name,
        avatar_url=avatar_url,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_smoke(db: Session, author: User, map_: Map, title: str = "Xbox from T spawn") -> Smoke:
    smoke = Smoke(
        title=title,
        video_url="https://www.youtube.com/watch?v=abc123",
        timestamp=15,
        x_coord=512.5,
        y_coord=768.25,
        author_id=author.id,
        map_id=map_.id,
    )
    db.add(smoke)
    db.commit()
    db.refresh(smoke)
    return smoke


@pytest.fixture()
def user_factory(db_session: Session) -> Callable[..., User]:
    """Create extra users on demand."""
    return lambda display_name, avatar_url=None: make_user(db_session, display_name, avatar_url)


@pytest.fixture()
def smoke_factory(db_session: Session) -> Callable[..., Smoke]:
    """Create extra smokes on demand."""
    return lambda author, map_, title="Xbox from T spawn": make_smoke(db_session, author, map_, title)


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return make_user(db_session, "Test Player", "https://avatars.example/test_full.jpg")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return make_user(db_session, "Other Player")


@pytest.fixture()
def auth_headers(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {issue_session_token(test_user)}"}


@pytest.fixture()
def other_auth_headers(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {issue_session_token(other_user)}"}


@pytest.fixture()
def game_map(db_session: Session) -> Map:
    """Create a map to attach smokes to."""
    map_ = Map(
        name="Dust2",
        description="Two bombsites joined by mid.",
        thumbnail="https://img.example/dust2.png",
        radar="/images/maps/map_dust2.webp",
    )
    db_session.add(map_)
    db_session.commit()
    db_session.refresh(map_)
    return map_


@pytest.fixture()
def test_smoke(db_session: Session, test_user: User, game_map: Map) -> Smoke:
    """Create a smoke authored by the primary test user."""
    return make_smoke(db_session, test_user, game_map)


@pytest.fixture()
def steam_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], SteamOpenIDClient]:
    """Build Steam clients whose HTTP traffic is answered by a handler."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> SteamOpenIDClient:
        return SteamOpenIDClient(STEAM_TEST_CONFIG, transport=httpx.MockTransport(handler))

    return _build


@pytest.fixture()
def override_steam_client(
    app: FastAPI,
    steam_transport: Callable[[Callable[[httpx.Request], httpx.Response]], SteamOpenIDClient],
) -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], SteamOpenIDClient]]:
    """Route the auth endpoints to a Steam client backed by a mock transport."""

    def _install(handler: Callable[[httpx.Request], httpx.Response]) -> SteamOpenIDClient:
        steam_client = steam_transport(handler)
        app.dependency_overrides[get_steam_client_dep] = lambda: steam_client
        return steam_client

    try:
        yield _install
    finally:
        app.dependency_overrides.pop(get_steam_client_dep, None)
