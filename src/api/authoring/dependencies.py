"""Dependency wiring for the authoring services.

Builds repository and service instances around a caller-provided session.

Usage:
    async for session in get_write_session():
        service = get_authoring_service(session)
        use_case = await service.create_use_case(project_id, creator_id, payload)
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from authoring.application.observability import (
    AuthoringServiceProbe,
    DefaultAuthoringServiceProbe,
    DefaultProjectServiceProbe,
    ProjectServiceProbe,
)
from authoring.application.relation_resolver import RelationResolver
from authoring.application.services import AuthoringService, ProjectService
from authoring.infrastructure.project_repository import (
    OwnershipLookup,
    ProjectRepository,
)
from authoring.infrastructure.sequence_store import SequenceStore
from authoring.infrastructure.use_case_repository import UseCaseRepository
from infrastructure.settings import get_authoring_settings
from shared_kernel.observability_context import ObservationContext


def get_authoring_service_probe() -> AuthoringServiceProbe:
    """Get AuthoringServiceProbe instance.

    Returns:
        DefaultAuthoringServiceProbe instance for observability
    """
    return DefaultAuthoringServiceProbe()


def get_project_service_probe() -> ProjectServiceProbe:
    return DefaultProjectServiceProbe()


def get_authoring_service(
    session: AsyncSession,
    probe: AuthoringServiceProbe | None = None,
    context: ObservationContext | None = None,
) -> AuthoringService:
    """Get AuthoringService instance bound to a session.

    Args:
        session: Async database session
        probe: Optional probe (defaults to the structlog probe)
        context: Optional observation context, e.g. carrying the request id

    Returns:
        AuthoringService with SQL repositories and sequence store
    """
    return AuthoringService(
        session=session,
        sequence_store=SequenceStore(),
        use_case_repository=UseCaseRepository(),
        project_repository=ProjectRepository(),
        resolver=RelationResolver(OwnershipLookup()),
        probe=probe or get_authoring_service_probe(),
        settings=get_authoring_settings(),
        context=context,
    )


def get_project_service(
    session: AsyncSession,
    probe: ProjectServiceProbe | None = None,
) -> ProjectService:
    """Get ProjectService instance bound to a session."""
    return ProjectService(
        session=session,
        project_repository=ProjectRepository(),
        sequence_store=SequenceStore(),
        probe=probe or get_project_service_probe(),
        settings=get_authoring_settings(),
    )
