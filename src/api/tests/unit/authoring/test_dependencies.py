"""Unit tests for authoring service wiring."""

from unittest.mock import AsyncMock

from authoring.application.observability import DefaultAuthoringServiceProbe
from authoring.application.services import AuthoringService, ProjectService
from authoring.dependencies import get_authoring_service, get_project_service
from authoring.infrastructure.project_repository import ProjectRepository
from authoring.infrastructure.sequence_store import SequenceStore
from authoring.infrastructure.use_case_repository import UseCaseRepository


def test_get_authoring_service_wires_sql_implementations():
    session = AsyncMock()

    service = get_authoring_service(session)

    assert isinstance(service, AuthoringService)
    assert service._session is session
    assert isinstance(service._sequences, SequenceStore)
    assert isinstance(service._use_cases, UseCaseRepository)
    assert isinstance(service._projects, ProjectRepository)
    assert isinstance(service._probe, DefaultAuthoringServiceProbe)


def test_get_project_service():
    session = AsyncMock()

    service = get_project_service(session)

    assert isinstance(service, ProjectService)
    assert service._session is session
