"""Root conftest: shared test configuration and store fixtures.

Invariants:
    - Environment pinned before any app module is imported (APP_ENV=test, SQLite URL)
    - Every test gets a fresh in-memory SQLite database with both tables created
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401  # registers tables on Base.metadata
from app.db.base import Base  # noqa: E402
from app.infrastructure.database import DatabaseSessionManager  # noqa: E402


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )


@pytest.fixture
async def test_engine():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def bare_engine():
    """Reachable store with no tables: probes pass, real queries fail."""
    engine = _memory_engine()
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        yield session


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager(engine=test_engine, pool_size=10)


@pytest.fixture
def count_rows(test_engine):
    """Count rows of a model through a fresh connection."""
    async def _count(model) -> int:
        async with test_engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count
