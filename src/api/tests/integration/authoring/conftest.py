"""Integration test fixtures for the authoring bounded context.

Each test gets a fresh SQLite file database (via aiosqlite) created from the
ORM metadata, with foreign key enforcement switched on. A file database
lets concurrent sessions hold their own connections, so counter allocation
is exercised under real write locking.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import authoring.infrastructure.models  # noqa: F401  (registers tables)
from authoring.application.services import AuthoringService, ProjectService
from authoring.dependencies import get_authoring_service, get_project_service
from authoring.domain.entities import Actor, Project
from infrastructure.database.models import Base

pytestmark = pytest.mark.integration

OWNER_ID = 42


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'authoring.db'}",
        connect_args={"timeout": 30},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def authoring_service(session: AsyncSession) -> AuthoringService:
    return get_authoring_service(session)


@pytest.fixture
def project_service(session: AsyncSession) -> ProjectService:
    return get_project_service(session)


@pytest_asyncio.fixture
async def project(project_service: ProjectService) -> Project:
    return await project_service.create_project("Web Shop", owner_id=OWNER_ID)


@pytest_asyncio.fixture
async def other_project(project_service: ProjectService) -> Project:
    return await project_service.create_project("Back Office", owner_id=OWNER_ID)


@pytest_asyncio.fixture
async def customer(project_service: ProjectService, project: Project) -> Actor:
    return await project_service.create_actor(project.id, "Customer")


@pytest.fixture
def count_rows(session_factory: async_sessionmaker[AsyncSession]):
    """Count rows of a model or table in a fresh session, optionally filtered."""

    async def _count(target, *criteria) -> int:
        async with session_factory() as fresh:
            stmt = select(func.count()).select_from(target)
            if criteria:
                stmt = stmt.where(*criteria)
            return await fresh.scalar(stmt)

    return _count
