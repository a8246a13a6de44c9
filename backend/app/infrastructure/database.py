"""Database Session Manager: async connection pool with bounded queuing, rollback, and health checks.

Invariants:
    - At most `capacity` sessions are in flight; further demand waits FIFO in the gate
    - Waiters beyond queue_limit, or waiting past timeout, get PoolExhaustedError (503)
    - Every session auto-rolls-back on exception and is always released
    - All SQLAlchemy exceptions escaping a session are mapped to DatabaseError (core/errors.py)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - ConnectionGate in front of the engine pool: SQLAlchemy bounds connections but not the
      number of waiters, so the queue bound lives here
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from app.core.errors import DatabaseError, PoolExhaustedError

logger = logging.getLogger(__name__)


class ConnectionGate:
    """Bounds concurrent store work and the queue waiting behind it.

    queue_limit=0 leaves the queue unbounded; timeout=None waits forever.
    """

    def __init__(
        self, capacity: int, queue_limit: int = 0, timeout: float | None = None,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.queue_limit = queue_limit
        self.timeout = timeout
        self._slots = asyncio.Semaphore(capacity)
        self._in_use = 0
        self._waiting = 0

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def waiting(self) -> int:
        return self._waiting

    @asynccontextmanager
    async def slot(self) -> AsyncGenerator[None, None]:
        """Hold one slot for the duration of the block."""
        if self._slots.locked() and self.queue_limit and self._waiting >= self.queue_limit:
            logger.warning(
                f"Connection queue full ({self._waiting} waiting)",
                extra={"error_code": "POOL_EXHAUSTED"},
            )
            raise PoolExhaustedError("queue_full")

        self._waiting += 1
        try:
            await asyncio.wait_for(self._slots.acquire(), self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Timed out after {self.timeout}s waiting for a connection",
                extra={"error_code": "POOL_EXHAUSTED"},
            )
            raise PoolExhaustedError("timeout")
        finally:
            self._waiting -= 1

        self._in_use += 1
        try:
            yield
        finally:
            self._in_use -= 1
            self._slots.release()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str | None = None,
        pool_size: int = 10,
        queue_limit: int = 0,
        pool_timeout: float | None = None,
        engine: AsyncEngine | None = None,
    ):
        if engine is None:
            if database_url is None:
                raise ValueError("database_url or engine is required")
            engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=0,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self.engine = engine
        self.gate = ConnectionGate(pool_size, queue_limit, pool_timeout)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        async with self.gate.slot():
            session = self._session_factory()
            try:
                yield session
            except IntegrityError as e:
                await session.rollback()
                logger.error(f"DB integrity error: {e}")
                raise DatabaseError("Database operation failed", "commit")
            except OperationalError as e:
                await session.rollback()
                logger.error(f"DB operational error: {e}")
                raise DatabaseError("Database operation failed", "execute")
            except DBAPIError as e:
                await session.rollback()
                logger.error(f"DB driver error: {e}")
                raise DatabaseError("Database operation failed", "query")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"SQLAlchemy error: {e}")
                raise DatabaseError("Database operation failed", "unknown")
            finally:
                await session.close()

    async def health_check(self) -> bool:
        """Run the trivial probe query; False on any failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


def get_manager() -> DatabaseSessionManager:
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_manager().session() as session:
        yield session
