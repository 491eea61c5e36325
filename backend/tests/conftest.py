import os

# Settings are read at import time; configure before importing idp.*
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("APP_ORIGIN", "https://idp.test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from dataclasses import dataclass
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from idp.api.deps import get_db, get_local_cache, get_notifier
from idp.auth.jwt import create_session_token
from idp.db.base import Base
from idp.main import app
from idp.reference import load_reference_data
from idp.services.local_cache import LocalResponseCache
from idp.services.notifications import ShareNotifier

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

OWNER_ID = "11111111-1111-1111-1111-111111111111"
OWNER_EMAIL = "owner@example.com"
COLLAB_ID = "22222222-2222-2222-2222-222222222222"
COLLAB_EMAIL = "collab@example.com"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def reference():
    return load_reference_data(str(DATA_DIR))


@pytest.fixture
def cache(tmp_path):
    return LocalResponseCache(tmp_path / "cache")


class RecordingEnqueue:
    """Stands in for Celery's .delay(); records payloads, optionally fails."""

    def __init__(self):
        self.calls: list[tuple[dict, str | None]] = []
        self.fail = False

    def __call__(self, payload, share_id):
        if self.fail:
            raise ConnectionError("broker unreachable")
        self.calls.append((payload, share_id))


@pytest.fixture
def enqueue():
    return RecordingEnqueue()


@pytest.fixture
def notifier(reference, enqueue):
    return ShareNotifier(reference=reference, enqueue=enqueue)


@pytest.fixture
def client(session_factory, cache, notifier):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_local_cache] = lambda: cache
    app.dependency_overrides[get_notifier] = lambda: notifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user_id: str, email: str) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user_id=user_id, email=email)}"}


@dataclass(frozen=True)
class Principal:
    id: str
    email: str
    headers: dict


@pytest.fixture
def owner() -> Principal:
    return Principal(OWNER_ID, OWNER_EMAIL, auth_headers(OWNER_ID, OWNER_EMAIL))


@pytest.fixture
def collaborator() -> Principal:
    return Principal(COLLAB_ID, COLLAB_EMAIL, auth_headers(COLLAB_ID, COLLAB_EMAIL))


@pytest.fixture
def stranger() -> Principal:
    uid, email = "33333333-3333-3333-3333-333333333333", "someone.else@example.com"
    return Principal(uid, email, auth_headers(uid, email))
