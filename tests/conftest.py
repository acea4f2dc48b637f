# tests/conftest.py

from __future__ import annotations

import os

# Settings are read at import time, so the environment must be in place first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SESSION_SECRET"] = "test-session-secret-with-32-plus-bytes"
os.environ["ENVIRONMENT"] = "development"

from datetime import date
import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from motivodo.db.session import get_session
from motivodo.main import app
from motivodo.services.quotes import Quote, QuoteService, get_quote_service
from motivodo.services.storage import DatabaseStorage

from .helpers import register


@pytest.fixture()
def engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection so the TestClient worker thread
    sees the same tables as the test itself.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def storage(session) -> DatabaseStorage:
    return DatabaseStorage(session)


class FakeClock:
    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(date(2026, 10, 17))


@pytest.fixture()
def quote_service(clock) -> QuoteService:
    quotes = [Quote(f"Quote {i}", f"Author {i}") for i in range(5)]
    return QuoteService(quotes, today=clock, rng=random.Random(1234))


@pytest.fixture()
def api(engine, quote_service):
    """Wire the app to the test engine and quote service."""

    def _get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_quote_service] = lambda: quote_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(api):
    with TestClient(api) as c:
        yield c


@pytest.fixture()
def other_client(api):
    """A second browser with its own cookie jar."""
    with TestClient(api) as c:
        yield c


@pytest.fixture()
def alice(client):
    response = register(client, "alice")
    assert response.status_code == 200
    return response.json()


@pytest.fixture()
def bob(other_client):
    response = register(other_client, "bob")
    assert response.status_code == 200
    return response.json()
