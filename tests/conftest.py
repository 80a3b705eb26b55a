"""Shared fixtures.

Every test gets its own in-memory SQLite database; the FastAPI app is pointed
at it through a ``get_db`` dependency override.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from tasksync.database import get_db
from tasksync.main import app
from tasksync.models import User


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def api(engine):
    """The app with ``get_db`` bound to the test engine."""

    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(api):
    return TestClient(api)


@pytest.fixture()
def make_user(db):
    def _make(email: str) -> User:
        # Password hashing is irrelevant here; token tests never check it.
        user = User(email=email, hashed_password="unused")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make
