"""Unit tests for ProjectService."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from authoring.application.observability import ProjectServiceProbe
from authoring.application.services.project_service import ProjectService
from authoring.domain.entities import Actor, Project
from authoring.domain.value_objects import PROJECT_COUNTER_KINDS, OwnerKind
from authoring.ports.exceptions import ProjectNotFoundError
from authoring.ports.repositories import IProjectRepository, ISequenceStore
from infrastructure.settings import AuthoringSettings


@pytest.fixture
def mock_projects():
    projects = create_autospec(IProjectRepository, instance=True)
    projects.add = AsyncMock(
        return_value=Project(id=3, name="Web Shop", slug="3-web-shop", owner_id=8)
    )
    return projects


@pytest.fixture
def mock_sequences():
    return create_autospec(ISequenceStore, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(ProjectServiceProbe, instance=True)


@pytest.fixture
def service(mock_session, mock_projects, mock_sequences, mock_probe) -> ProjectService:
    return ProjectService(
        session=mock_session,
        project_repository=mock_projects,
        sequence_store=mock_sequences,
        probe=mock_probe,
        settings=AuthoringSettings(project_slug_max_length=40),
    )


class TestCreateProject:
    @pytest.mark.asyncio
    async def test_creates_project_counters_in_same_transaction(
        self, service, mock_projects, mock_sequences, mock_session
    ):
        project = await service.create_project("Web Shop", owner_id=8)

        assert project.slug == "3-web-shop"
        mock_session.begin.assert_called_once()
        mock_projects.add.assert_awaited_once_with(
            mock_session,
            name="Web Shop",
            owner_id=8,
            description="",
            slug_max_length=40,
        )
        mock_sequences.create_counters.assert_awaited_once_with(
            mock_session, 3, OwnerKind.PROJECT, PROJECT_COUNTER_KINDS
        )

    @pytest.mark.asyncio
    async def test_probe_records_creation(self, service, mock_probe):
        await service.create_project("Web Shop", owner_id=8)

        mock_probe.project_created.assert_called_once_with(
            project_id=3, slug="3-web-shop", owner_id=8
        )


class TestCreateActor:
    @pytest.mark.asyncio
    async def test_creates_actor_in_existing_project(self, service, mock_projects):
        mock_projects.get_by_id = AsyncMock(
            return_value=Project(id=3, name="Web Shop", slug="3-web-shop", owner_id=8)
        )
        mock_projects.add_actor = AsyncMock(
            return_value=Actor(id=12, project_id=3, name="Customer")
        )

        actor = await service.create_actor(3, "Customer")

        assert actor.id == 12

    @pytest.mark.asyncio
    async def test_missing_project(self, service, mock_projects, mock_probe):
        mock_projects.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(ProjectNotFoundError) as exc_info:
            await service.create_actor(3, "Customer")

        assert exc_info.value.project_id == 3
        mock_projects.add_actor.assert_not_awaited()
        mock_probe.project_not_found.assert_called_once_with(project_id=3)
