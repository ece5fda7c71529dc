"""
Shared pytest fixtures.

Settings are read from the environment when ``app.config`` is first imported,
so the overrides below must run before any ``app`` import.

Fixtures:
    db_engine / db_session: in-memory SQLite with the schema created
    session_store:           fresh in-memory session store installed on the app
    youtube:                 fake YouTube client injected into the search route
    client / make_client:    HTTPX AsyncClient(s) talking to the ASGI app
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SESSION_BACKEND"] = "memory"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum, keeps the suite fast
os.environ["YOUTUBE_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.models import user, playlist  # noqa: F401
from app.db.session import get_db
from app.core.session_store import InMemorySessionStore
from app.core.sessions import SessionManager
from app.core.youtube_client import get_youtube_client


class FakeYouTubeClient:
    """Records queries and returns canned items (or None to simulate failure)."""

    def __init__(self, items=None):
        self.items = items
        self.queries = []

    def search_videos(self, query):
        self.queries.append(query)
        return self.items


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    yield session
    session.close()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def youtube():
    return FakeYouTubeClient(items=[])


@pytest.fixture
def api_app(db_engine, session_store, youtube):
    """The FastAPI app wired to the test database, session store and YouTube fake."""
    from app.main import app as fastapi_app

    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = testing_session()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_youtube_client] = lambda: youtube
    previous_manager = fastapi_app.state.session_manager
    fastapi_app.state.session_manager = SessionManager(session_store)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    fastapi_app.state.session_manager = previous_manager


@pytest.fixture
def make_client(api_app):
    """Factory for independent clients, each with its own cookie jar."""

    @asynccontextmanager
    async def _make():
        transport = ASGITransport(app=api_app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as c:
            yield c

    return _make


@pytest_asyncio.fixture
async def client(make_client):
    async with make_client() as c:
        yield c

