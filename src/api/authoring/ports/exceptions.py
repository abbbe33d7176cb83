"""Domain exceptions for the authoring bounded context.

These exceptions represent the errors an authoring operation can end in.
Every one of them aborts the surrounding transaction; the caller maps them
to transport-level responses.
"""

from __future__ import annotations

from typing import Any


class AuthoringError(Exception):
    """Base class for all authoring errors."""

    pass


class CounterNotFoundError(AuthoringError):
    """Raised when a required sequence counter row does not exist.

    This is an integrity error, not a user error: counter rows are created
    together with their owner, so a missing row means the owner record is
    corrupted. It is never retried.
    """

    def __init__(self, owner_kind: str, owner_id: int, counter_kind: str):
        super().__init__(
            f"No {counter_kind} counter for {owner_kind} {owner_id}"
        )
        self.owner_kind = owner_kind
        self.owner_id = owner_id
        self.counter_kind = counter_kind


class ReferenceNotFoundError(AuthoringError):
    """Raised when a payload attaches an actor, rule or flow that does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ForeignOwnershipError(AuthoringError):
    """Raised when a referenced entity belongs to a different parent.

    Covers actors and business rules from another project as well as parent
    flows from another use case.
    """

    def __init__(
        self,
        entity: str,
        entity_id: int,
        expected_owner_id: int,
        actual_owner_id: int,
    ):
        super().__init__(
            f"{entity} with id {entity_id} belongs to {actual_owner_id}, "
            f"not to {expected_owner_id}"
        )
        self.entity = entity
        self.entity_id = entity_id
        self.expected_owner_id = expected_owner_id
        self.actual_owner_id = actual_owner_id


class DuplicateNormalFlowError(AuthoringError):
    """Raised when a second normal flow is requested for a use case."""

    def __init__(self, use_case_id: int | None = None):
        target = f"use case {use_case_id}" if use_case_id is not None else "use case"
        super().__init__(f"A normal flow already exists for {target}")
        self.use_case_id = use_case_id


class ParentFlowRequiredError(AuthoringError):
    """Raised when an exception flow names no parent flow."""

    def __init__(self, flow_name: str):
        super().__init__(f"Exception flow '{flow_name}' needs a parent flow")
        self.flow_name = flow_name


class ParentFlowNotFoundError(AuthoringError):
    """Raised when an exception flow's parent cannot be resolved."""

    def __init__(self, parent: Any):
        super().__init__(f"Parent flow {parent!r} not found")
        self.parent = parent


class OwnershipMismatchError(AuthoringError):
    """Raised when an update names a project or creator the use case lacks.

    No mutation happens before this check.
    """

    def __init__(self, use_case_id: int, field: str):
        super().__init__(
            f"Use case {use_case_id} does not belong to the specified {field}"
        )
        self.use_case_id = use_case_id
        self.field = field


class ProjectNotFoundError(AuthoringError):
    """Raised when the project an operation is scoped to does not exist."""

    def __init__(self, project_id: int):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


class UseCaseNotFoundError(AuthoringError):
    """Raised when the use case an operation is scoped to does not exist."""

    def __init__(self, use_case_id: int):
        super().__init__(f"Use case {use_case_id} not found")
        self.use_case_id = use_case_id


class UseCaseValidationError(AuthoringError):
    """Raised when assembling a use case graph fails.

    Wraps the first relation or identifier error met while building the
    graph of a create or update call. The wrapped error is kept as
    ``cause`` (and as ``__cause__``).
    """

    def __init__(self, cause: AuthoringError):
        super().__init__(f"Invalid use case: {cause}")
        self.cause = cause
