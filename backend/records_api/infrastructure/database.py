"""Database Session Manager — async connection pool, connectivity state and error mapping.

Invariants:
    - One DatabaseSessionManager per process, created in the lifespan (init_db)
    - Connection state is live: pool events flip it, /health reads it directly
    - Pool events only fire on use: after an outage while idle, /health keeps
      reporting "connected" until a query fails. /health/ready pings the
      database on every call and is the authoritative probe
    - A failed initial connect is logged and leaves the state "disconnected";
      the process keeps serving and persistence-backed requests fail one by one
    - All SQLAlchemy exceptions leave this module as core/errors.py types

Design Decisions:
    - Pool options only applied to server databases; SQLite (tests) keeps the dialect default pool
    - pool_pre_ping replaces connections that died between requests; no custom retry loop
    - Tables created on connect when missing; there are no migrations
"""

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncGenerator, Iterator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, InterfaceError, OperationalError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from records_api import models  # noqa: F401  (registers tables on Base.metadata)
from records_api.core.domain_types import ConnectionState
from records_api.core.errors import (
    DatabaseError, DatabaseUnavailableError, DuplicateKeyError,
)
from records_api.db.base import Base
from records_api.infrastructure.conflicts import (
    ConflictFieldExtractor, SQLAlchemyConflictFieldExtractor,
)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine, the session factory and the connectivity state."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 10,
        timeout_seconds: float = 30.0,
        pool_pre_ping: bool = True,
    ):
        url = make_url(database_url)
        self.backend_name = url.get_backend_name()
        engine_kwargs = {}
        if self.backend_name != "sqlite":
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_timeout": timeout_seconds,
                "pool_pre_ping": pool_pre_ping,
                "pool_recycle": 3600,
                "connect_args": {"timeout": timeout_seconds},
            }
        self.engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._state = ConnectionState.DISCONNECTED
        event.listen(self.engine.sync_engine, "connect", self._on_connect)
        event.listen(self.engine.sync_engine, "handle_error", self._on_error)

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def _on_connect(self, dbapi_connection, connection_record) -> None:
        self._state = ConnectionState.CONNECTED

    def _on_error(self, context) -> None:
        # connection is None when the error happened while connecting
        if context.is_disconnect or context.connection is None:
            if self._state is ConnectionState.CONNECTED:
                logger.warning("Database connection lost")
            self._state = ConnectionState.DISCONNECTED

    def mark_disconnected(self) -> None:
        self._state = ConnectionState.DISCONNECTED

    async def connect(self) -> bool:
        """Create missing tables and ping. Never raises on connectivity failure."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            self._state = ConnectionState.DISCONNECTED
            logger.error(f"Database connection error: {e}")
            return False
        self._state = ConnectionState.CONNECTED
        logger.info(f"Database connected ({self.backend_name})")
        return True

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            self._state = ConnectionState.DISCONNECTED
            logger.error(f"DB health check failed: {e}")
            return False
        self._state = ConnectionState.CONNECTED
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session; uncommitted work is rolled back on close."""
        session = self._session_factory()
        try:
            yield session
        finally:
            await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()
        self._state = ConnectionState.DISCONNECTED


_conflict_extractor: ConflictFieldExtractor = SQLAlchemyConflictFieldExtractor()


@contextmanager
def translate_errors(
    operation: str,
    extractor: ConflictFieldExtractor | None = None,
) -> Iterator[None]:
    """Map driver exceptions raised inside the block to core/errors.py types."""
    try:
        yield
    except IntegrityError as e:
        field = (extractor or _conflict_extractor).extract(e)
        logger.warning(
            f"DB duplicate key on {operation}",
            extra={"error_code": "DUPLICATE_KEY", "field": field},
        )
        raise DuplicateKeyError(field, operation) from e
    except (OperationalError, InterfaceError, PoolTimeoutError) as e:
        logger.error(f"DB unavailable during {operation}: {e}")
        raise DatabaseUnavailableError(operation) from e
    except SQLAlchemyError as e:
        logger.error(f"DB error during {operation}: {e}")
        raise DatabaseError("Database operation failed", operation) from e
    except OSError as e:
        if db_manager:
            db_manager.mark_disconnected()
        logger.error(f"DB connection error during {operation}: {e}")
        raise DatabaseUnavailableError(operation) from e


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
    db_manager = None


def connection_state() -> ConnectionState:
    """Live connectivity of the process-wide manager."""
    return db_manager.state if db_manager else ConnectionState.DISCONNECTED


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise DatabaseUnavailableError("session")
    async with db_manager.session() as session:
        yield session
