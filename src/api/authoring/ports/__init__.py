"""Ports for the authoring bounded context."""

from authoring.ports.exceptions import (
    AuthoringError,
    CounterNotFoundError,
    DuplicateNormalFlowError,
    ForeignOwnershipError,
    OwnershipMismatchError,
    ParentFlowNotFoundError,
    ParentFlowRequiredError,
    ProjectNotFoundError,
    ReferenceNotFoundError,
    UseCaseNotFoundError,
    UseCaseValidationError,
)
from authoring.ports.repositories import (
    FlowRef,
    IOwnershipLookup,
    IProjectRepository,
    ISequenceStore,
    IUseCaseRepository,
    OwnedRef,
    UseCaseHeader,
)

__all__ = [
    "AuthoringError",
    "CounterNotFoundError",
    "DuplicateNormalFlowError",
    "FlowRef",
    "ForeignOwnershipError",
    "IOwnershipLookup",
    "IProjectRepository",
    "ISequenceStore",
    "IUseCaseRepository",
    "OwnedRef",
    "OwnershipMismatchError",
    "ParentFlowNotFoundError",
    "ParentFlowRequiredError",
    "ProjectNotFoundError",
    "ReferenceNotFoundError",
    "UseCaseHeader",
    "UseCaseNotFoundError",
    "UseCaseValidationError",
]
