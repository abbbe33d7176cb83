"""Database session providers.

Provides the async session factory for write operations with proper
transaction management and connection pooling.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import WRITE_ISOLATION_LEVEL, create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultConnectionProbe()

# Module-level engine instance (created on first use)
_write_engine: AsyncEngine | None = None

# Module-level sessionmaker instance (created with the engine)
_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine for write operations
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _write_engine is None:
                settings = get_database_settings()
                _write_engine = create_write_engine(settings)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    database=settings.database,
                    host=settings.host,
                    pool_size=settings.pool_max_connections,
                    isolation_level=WRITE_ISOLATION_LEVEL,
                )
    return _write_engine


def get_write_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the cached sessionmaker bound to the write engine."""
    get_write_engine()
    assert _write_sessionmaker is not None
    return _write_sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations.

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`; the authoring
    services do this once per operation.

    Usage:
        async for session in get_write_session():
            service = get_authoring_service(session)
            use_case = await service.create_use_case(...)

    Yields:
        AsyncSession for database operations
    """
    sessionmaker = get_write_sessionmaker()

    async with sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Close all database engine connections.

    Should be called on application shutdown to properly cleanup connections.
    Also resets the sessionmaker to allow reinitialization.
    """
    global _write_engine, _write_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.engine_disposed(database=_write_engine.url.database)
        _write_engine = None
        _write_sessionmaker = None
