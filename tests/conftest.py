# tests/conftest.py

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from getitdone import models  # noqa: F401
from getitdone.config import Settings, get_now, get_settings
from getitdone.db.config import get_session
from getitdone.main import app

# Wednesday; the week runs Monday 2026-10-19 .. Sunday 2026-10-25
NOW = datetime(2026, 10, 21, 12, 0, 0)
TEST_SETTINGS = Settings(database_url="sqlite://")

# One in-memory database shared by every connection of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    with Session(engine) as session:
        yield session


def override_get_now():
    return NOW


def override_get_settings():
    return TEST_SETTINGS


app.dependency_overrides[get_session] = override_get_session
app.dependency_overrides[get_now] = override_get_now
app.dependency_overrides[get_settings] = override_get_settings


@pytest.fixture(autouse=True)
def clean_db():
    """Fresh schema for every test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def db_session():
    with Session(engine) as session:
        yield session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def now():
    return NOW
