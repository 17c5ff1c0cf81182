"""Pytest configuration and fixtures."""

import os
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mangia.database import Base, init_db
from mangia.models.user import User
from mangia.services.undo_store import InMemoryUndoStore

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/mangia", "/mangia_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    init_db(engine)
    yield


@pytest.fixture(scope="function")
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(autouse=True)
def event_queue():
    """Capture pantry events instead of sending them to the broker."""
    with patch("mangia.tasks.pantry_events.record_pantry_events.delay") as mock_delay:
        yield mock_delay


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def undo_store(clock):
    return InMemoryUndoStore(clock=clock)


@pytest.fixture
def user(db):
    """Create the user who owns the test data."""
    test_user = User(email="cook@example.com", name="Cook")
    db.add(test_user)
    db.commit()
    return test_user


@pytest.fixture
def other_user(db):
    """Create a second user for ownership checks."""
    test_user = User(email="neighbour@example.com", name="Neighbour")
    db.add(test_user)
    db.commit()
    return test_user
