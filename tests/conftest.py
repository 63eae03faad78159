# tests/conftest.py
"""
Pytest configuration for the SlotSwap test suite.

Every test gets its own file-backed SQLite database under ``tmp_path`` so
tests can open more than one session against the same data.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from slotswap.api.dependencies.database import get_db
from slotswap.core.config import settings
from slotswap.database import Base, create_db_engine
from slotswap.main import app
from slotswap.models import Slot, SlotStatus, User
from slotswap.services.base import BaseService

BASE_START = datetime(2026, 11, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """Fresh SQLite database file with all tables created."""
    test_engine = create_db_engine(f"sqlite:///{tmp_path / 'slotswap_test.db'}")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Create a new database session for each test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def _reset_service_metrics() -> Generator[None, None, None]:
    yield
    BaseService._class_metrics.clear()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    # Don't use context manager - lifespan startup is not needed
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


def _create_user(db: Session, name: str, email: str) -> User:
    user = User(name=name, email=email)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def user_one(db: Session) -> User:
    return _create_user(db, "Ada One", "ada.one@example.com")


@pytest.fixture
def user_two(db: Session) -> User:
    return _create_user(db, "Ben Two", "ben.two@example.com")


@pytest.fixture
def user_three(db: Session) -> User:
    return _create_user(db, "Cy Three", "cy.three@example.com")


@pytest.fixture
def make_slot(db: Session) -> Callable[..., Slot]:
    """
    Factory for committed slots.

    Each call lands one hour after the previous one unless ``start_time`` is
    given, so listings keep a stable insertion order.
    """
    counter = {"n": 0}

    def _make_slot(
        owner: User,
        status: SlotStatus = SlotStatus.SWAPPABLE,
        title: str = "Focus block",
        start_time: datetime | None = None,
        duration: timedelta = timedelta(minutes=30),
    ) -> Slot:
        offset = counter["n"]
        counter["n"] += 1
        start = start_time or BASE_START + timedelta(hours=offset)
        slot = Slot(
            owner_id=owner.id,
            title=title,
            start_time=start,
            end_time=start + duration,
            status=status,
            created_at=BASE_START + timedelta(seconds=offset),
        )
        db.add(slot)
        db.commit()
        return slot

    return _make_slot


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    """Build the identity header for a user."""

    def _headers(user: User) -> dict:
        return {settings.identity_header: user.id}

    return _headers
