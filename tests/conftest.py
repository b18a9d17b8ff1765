"""Shared fixtures: in-memory database, registry and fake channels."""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_TIMEZONE", "Asia/Kolkata")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from hostelia.domain.entities import User
from hostelia.infrastructure import database
from hostelia.infrastructure.notifications import (
    ChannelClosedError,
    NotificationConnectionManager,
    NotificationPublisher,
)
from hostelia.infrastructure.repositories import UserRepository


class FakeChannel:
    """In-memory channel that records frames and can be told to fail."""

    def __init__(self, *, fail: bool = False) -> None:
        self.frames: list[str] = []
        self.fail = fail
        self.closed = False
        self._callbacks = []

    def write(self, frame: str) -> None:
        if self.fail or self.closed:
            raise ChannelClosedError("broken pipe")
        self.frames.append(frame)

    def on_close(self, callback) -> None:
        self._callbacks.append(callback)

    def close(self) -> None:
        self.closed = True
        for callback in self._callbacks:
            callback()


@pytest.fixture(autouse=True)
def database_schema():
    """Give every test an empty schema on the shared in-memory engine."""

    database.initialize_database()
    yield
    database.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def manager() -> NotificationConnectionManager:
    return NotificationConnectionManager()


@pytest.fixture()
def publisher(manager: NotificationConnectionManager) -> NotificationPublisher:
    return NotificationPublisher(manager)


@pytest.fixture()
def channel_factory():
    return FakeChannel


@pytest.fixture()
def make_user(session):
    """Insert a user without hashing a real password."""

    counter = {"value": 0}

    def _make_user(
        role: str = "student",
        *,
        hostel: str | None = "BH-1",
        is_active: bool = True,
        name: str | None = None,
    ) -> User:
        counter["value"] += 1
        index = counter["value"]
        return UserRepository(session).create(
            User(
                id=None,
                name=name or f"{role.title()} {index}",
                email=f"{role}{index}@hostelia.test",
                password="not-a-real-hash",
                role=role,
                hostel=hostel,
                is_active=is_active,
            )
        )

    return _make_user


@pytest.fixture()
def anyio_backend():
    return "asyncio"
