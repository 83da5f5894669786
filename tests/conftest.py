# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("PRESENCE_SWEEP_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from terminal_terrors.core.security import hash_password
from terminal_terrors.core.settings import settings
from terminal_terrors.db.session import Base, make_engine
from terminal_terrors.db.session import get_db as app_get_session
from terminal_terrors.main import app as fastapi_app
from terminal_terrors.models import Player
from terminal_terrors.services.tokens import SessionIssuer, get_session_issuer

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret1"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = make_engine(TEST_DB_URL, poolclass=StaticPool)
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
        session.close()


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


@pytest.fixture()
def issuer() -> SessionIssuer:
    """Issuer sharing the application's secret and token lifetime."""
    return get_session_issuer()


@pytest.fixture()
def short_issuer() -> SessionIssuer:
    """Issuer with a one-minute lifetime for expiry tests."""
    return SessionIssuer(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=1),
    )


def make_player(
    db: Session,
    username: str,
    *,
    password: str = TEST_PASSWORD,
    email: str | None = None,
) -> Player:
    """Persist an account directly, bypassing the registration endpoint."""
    player = Player(username=username, email=email, password_hash=hash_password(password, rounds=4))
    db.add(player)
    db.commit()
    db.refresh(player)
    return player


@pytest.fixture()
def test_player(db_session: Session) -> Player:
    """Create and return the primary test account."""
    return make_player(db_session, "alice", email="a@x.com")


@pytest.fixture()
def other_player(db_session: Session) -> Player:
    """Create and return a second test account."""
    return make_player(db_session, "bob")


@pytest.fixture()
def auth_headers(test_player: Player, issuer: SessionIssuer) -> dict[str, str]:
    """Return authorization headers for the primary test account."""
    token = issuer.issue(test_player.id, test_player.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_headers(other_player: Player, issuer: SessionIssuer) -> dict[str, str]:
    """Return authorization headers for the secondary test account."""
    token = issuer.issue(other_player.id, other_player.username)
    return {"Authorization": f"Bearer {token}"}
