"""Project application service for the authoring bounded context.

Creates projects together with the counter rows their identifiers are
drawn from, and the actors use cases attach to.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from authoring.application.observability import (
    DefaultProjectServiceProbe,
    ProjectServiceProbe,
)
from authoring.domain.entities import Actor, Project
from authoring.domain.value_objects import PROJECT_COUNTER_KINDS, OwnerKind
from authoring.ports.exceptions import ProjectNotFoundError
from authoring.ports.repositories import IProjectRepository, ISequenceStore
from infrastructure.settings import AuthoringSettings, get_authoring_settings


class ProjectService:
    """Application service for project management."""

    def __init__(
        self,
        session: AsyncSession,
        project_repository: IProjectRepository,
        sequence_store: ISequenceStore,
        probe: ProjectServiceProbe | None = None,
        settings: AuthoringSettings | None = None,
    ):
        """Initialize ProjectService with dependencies.

        Args:
            session: Database session for transaction management
            project_repository: Repository for project persistence
            sequence_store: Store holding the project's identifier counters
            probe: Optional domain probe for observability
            settings: Optional authoring settings (defaults to cached settings)
        """
        self._session = session
        self._projects = project_repository
        self._sequences = sequence_store
        self._probe = probe or DefaultProjectServiceProbe()
        self._settings = settings or get_authoring_settings()

    async def create_project(
        self, name: str, owner_id: int, description: str = ""
    ) -> Project:
        """Create a project and its use case and business rule counters.

        Both happen in one transaction, so a project never exists without
        the counters its first ``UC-1`` and ``BR-1`` will come from.
        """
        async with self._session.begin():
            project = await self._projects.add(
                self._session,
                name=name,
                owner_id=owner_id,
                description=description,
                slug_max_length=self._settings.project_slug_max_length,
            )
            await self._sequences.create_counters(
                self._session, project.id, OwnerKind.PROJECT, PROJECT_COUNTER_KINDS
            )

        self._probe.project_created(
            project_id=project.id, slug=project.slug, owner_id=owner_id
        )
        return project

    async def create_actor(
        self, project_id: int, name: str, description: str | None = None
    ) -> Actor:
        """Create an actor in an existing project.

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        async with self._session.begin():
            project = await self._projects.get_by_id(self._session, project_id)
            if project is None:
                self._probe.project_not_found(project_id=project_id)
                raise ProjectNotFoundError(project_id)

            actor = await self._projects.add_actor(
                self._session, project_id=project_id, name=name, description=description
            )

        self._probe.actor_created(actor_id=actor.id, project_id=project_id, name=name)
        return actor

    async def get_project(self, project_id: int) -> Project | None:
        async with self._session.begin():
            return await self._projects.get_by_id(self._session, project_id)
