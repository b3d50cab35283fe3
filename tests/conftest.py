"""
Shared pytest fixtures: an in-memory SQLite store, a controllable clock and a
UserDirectory bound to both.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database.connection import Base
from app.models import model  # noqa: F401
from app.services.user_directory import UserDirectory


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 9, 0, 0))


@pytest.fixture
def directory(session_factory, clock):
    return UserDirectory(session_factory=session_factory, clock=clock)


@pytest.fixture
def make_user(directory):
    """Register a user with sensible defaults; keyword arguments override fields."""

    def _make_user(username: str, **fields):
        payload = {
            "username": username,
            "password": "s3cret-pass",
            "firstname": "Test",
            "lastname": "User",
            "salary": 50000,
            "age": 30,
        }
        payload.update(fields)
        return directory.register(payload)

    return _make_user
