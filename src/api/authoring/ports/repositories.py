"""Repository protocols (ports) for the authoring bounded context.

Every method takes the open transaction handle (an ``AsyncSession``) as its
first argument. Implementations never open, commit or roll back
transactions themselves; the application services own the unit of work.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from authoring.domain.entities import (
    Actor,
    BusinessRule,
    Condition,
    Flow,
    Project,
    UseCase,
)
from authoring.domain.value_objects import (
    ConditionKind,
    CounterKind,
    FlowKind,
    Mutability,
    OwnerKind,
    RuleType,
    StepSpec,
    UseCaseDetails,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class OwnedRef:
    """Result of an ownership point lookup: an entity id and its owner's id."""

    id: int
    owner_id: int


@dataclass(frozen=True)
class FlowRef:
    """Identity of a persisted flow, as needed to branch an exception flow off it."""

    id: int
    use_case_id: int
    public_id: str
    kind: FlowKind


@dataclass(frozen=True)
class UseCaseHeader:
    """Ownership and identity columns of a persisted use case."""

    id: int
    project_id: int
    creator_id: int
    public_id: str


@runtime_checkable
class ISequenceStore(Protocol):
    """Durable per-owner, per-kind counters behind public identifiers."""

    async def create_counters(
        self,
        session: AsyncSession,
        owner_id: int,
        owner_kind: OwnerKind,
        counter_kinds: Sequence[CounterKind],
    ) -> None:
        """Create one zeroed counter row per kind for a new owner."""
        ...

    async def next_value(
        self,
        session: AsyncSession,
        owner_id: int,
        owner_kind: OwnerKind,
        counter_kind: CounterKind,
    ) -> int:
        """Atomically increment the counter and return the new value.

        Raises:
            CounterNotFoundError: If the owner has no counter of that kind
        """
        ...

    async def current_value(
        self,
        session: AsyncSession,
        owner_id: int,
        owner_kind: OwnerKind,
        counter_kind: CounterKind,
    ) -> int | None:
        """Return the counter's current value, or None if the row is missing."""
        ...

    async def delete_counters(
        self, session: AsyncSession, owner_id: int, owner_kind: OwnerKind
    ) -> None:
        """Delete every counter row of an owner."""
        ...


@runtime_checkable
class IOwnershipLookup(Protocol):
    """Point lookups used to validate connect-by-reference payload items."""

    async def find_actor(self, session: AsyncSession, actor_id: int) -> OwnedRef | None:
        """Return the actor's id and project id, or None if it does not exist."""
        ...

    async def find_business_rule(
        self, session: AsyncSession, business_rule_id: int
    ) -> OwnedRef | None:
        """Return the business rule's id and project id, or None."""
        ...


@runtime_checkable
class IProjectRepository(Protocol):
    """Persistence of projects and their directly owned entities."""

    async def add(
        self,
        session: AsyncSession,
        name: str,
        owner_id: int,
        description: str = "",
        slug_max_length: int = 64,
    ) -> Project:
        """Insert a project and assign its slug."""
        ...

    async def get_by_id(self, session: AsyncSession, project_id: int) -> Project | None:
        ...

    async def add_actor(
        self,
        session: AsyncSession,
        project_id: int,
        name: str,
        description: str | None = None,
    ) -> Actor:
        ...

    async def add_business_rule(
        self,
        session: AsyncSession,
        project_id: int,
        public_id: str,
        rule_def: str,
        type: RuleType,
        mutability: Mutability,
        source: str,
    ) -> BusinessRule:
        ...


@runtime_checkable
class IUseCaseRepository(Protocol):
    """Persistence of use cases and the entities nested under them."""

    async def add(
        self,
        session: AsyncSession,
        project_id: int,
        creator_id: int,
        public_id: str,
        primary_actor_id: int,
        details: UseCaseDetails,
        slug_max_length: int = 50,
    ) -> UseCaseHeader:
        """Insert a use case row and assign its slug."""
        ...

    async def get_header(
        self, session: AsyncSession, use_case_id: int
    ) -> UseCaseHeader | None:
        ...

    async def update_details(
        self,
        session: AsyncSession,
        use_case_id: int,
        primary_actor_id: int,
        details: UseCaseDetails,
        slug_max_length: int = 50,
    ) -> None:
        """Overwrite the descriptive fields, primary actor and slug."""
        ...

    async def link_secondary_actors(
        self, session: AsyncSession, use_case_id: int, actor_ids: Sequence[int]
    ) -> None:
        ...

    async def link_business_rules(
        self, session: AsyncSession, use_case_id: int, business_rule_ids: Sequence[int]
    ) -> None:
        ...

    async def clear_links(self, session: AsyncSession, use_case_id: int) -> None:
        """Remove every secondary actor and business rule link of a use case."""
        ...

    async def add_condition(
        self,
        session: AsyncSession,
        use_case_id: int,
        public_id: str,
        kind: ConditionKind,
        description: str,
    ) -> Condition:
        ...

    async def add_flow(
        self,
        session: AsyncSession,
        use_case_id: int,
        public_id: str,
        name: str,
        kind: FlowKind,
        steps: Sequence[StepSpec],
        parent_flow_id: int | None = None,
    ) -> Flow:
        """Insert a flow with its steps (numbered by position) and references."""
        ...

    async def get_flow_ref(self, session: AsyncSession, flow_id: int) -> FlowRef | None:
        ...

    async def has_normal_flow(self, session: AsyncSession, use_case_id: int) -> bool:
        ...

    async def delete_conditions(self, session: AsyncSession, use_case_id: int) -> int:
        """Delete all conditions of a use case, returning how many were removed."""
        ...

    async def delete_flows(self, session: AsyncSession, use_case_id: int) -> int:
        """Delete all flows of a use case with their steps and references."""
        ...

    async def delete(self, session: AsyncSession, use_case_id: int) -> None:
        """Delete a use case row together with every row nested under it."""
        ...

    async def get_graph(self, session: AsyncSession, use_case_id: int) -> UseCase | None:
        """Return the fully materialised use case, or None."""
        ...

    async def get_graph_by_slug(self, session: AsyncSession, slug: str) -> UseCase | None:
        ...
