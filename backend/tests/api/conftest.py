"""API test fixtures: fresh app per test + httpx client over ASGI.

Invariants:
    - Each test gets its own create_app() (own LivenessState and metrics registry)
    - db_manager patched on the database module, so the DB-health gate and get_db
      both go through the test store
    - down_client simulates an unreachable store: probe fails, sessions are counted

Design Decisions:
    - Lifespan not run by ASGITransport: the manager is installed directly instead of
      through init_db
"""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

import app.infrastructure.database as db_module
from app.config import Settings
from app.infrastructure.database import DatabaseSessionManager
from app.main import create_app


class UnreachableStore:
    """Stands in for a manager whose store cannot be reached."""

    def __init__(self):
        self.probes = 0
        self.sessions_opened = 0

    async def health_check(self) -> bool:
        self.probes += 1
        return False

    @asynccontextmanager
    async def session(self):
        self.sessions_opened += 1
        raise AssertionError("store operation attempted while the store is down")
        yield


@pytest.fixture
def api_app():
    return create_app(Settings())


def _client_for(application):
    return AsyncClient(
        transport=ASGITransport(app=application), base_url="http://test",
    )


@pytest.fixture
async def client(api_app, db_manager, monkeypatch):
    """FastAPI test client backed by the in-memory store."""
    monkeypatch.setattr(db_module, "db_manager", db_manager)
    async with _client_for(api_app) as c:
        yield c


@pytest.fixture
def unreachable_store():
    return UnreachableStore()


@pytest.fixture
async def down_client(api_app, unreachable_store, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", unreachable_store)
    async with _client_for(api_app) as c:
        yield c


@pytest.fixture
async def broken_client(api_app, bare_engine, monkeypatch):
    """Store answers the probe but has no tables, so every data query fails."""
    monkeypatch.setattr(
        db_module, "db_manager", DatabaseSessionManager(engine=bare_engine),
    )
    async with _client_for(api_app) as c:
        yield c
