"""Entities of the authoring domain.

These are the fully materialised shapes returned to callers. A UseCase
carries its whole graph: conditions, flows with their steps and references,
actors and business rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from authoring.domain.value_objects import (
    ConditionKind,
    FlowKind,
    Mutability,
    Priority,
    ReferenceType,
    RuleType,
)


@dataclass(frozen=True)
class Project:
    """A requirements project owning actors, business rules and use cases."""

    id: int
    name: str
    slug: str
    owner_id: int
    description: str = ""


@dataclass(frozen=True)
class Actor:
    """Someone or something interacting with the system under design."""

    id: int
    project_id: int
    name: str
    description: str | None = None


@dataclass(frozen=True)
class BusinessRule:
    """A project-wide rule, attachable to any number of use cases."""

    id: int
    project_id: int
    public_id: str
    rule_def: str
    type: RuleType
    mutability: Mutability
    source: str


@dataclass(frozen=True)
class Condition:
    """A pre- or postcondition of a use case."""

    id: int
    use_case_id: int
    public_id: str
    kind: ConditionKind
    description: str


@dataclass(frozen=True)
class Reference:
    """A pointer from a step to another authored entity."""

    id: int
    step_id: int
    ref_type: ReferenceType
    ref_id: int
    location: int


@dataclass(frozen=True)
class Step:
    """A single numbered step inside a flow."""

    id: int
    flow_id: int
    public_id: str
    position: int
    description: str
    references: list[Reference] = field(default_factory=list)


@dataclass(frozen=True)
class Flow:
    """An ordered sequence of steps through a use case."""

    id: int
    use_case_id: int
    public_id: str
    name: str
    kind: FlowKind
    parent_flow_id: int | None = None
    steps: list[Step] = field(default_factory=list)

    @property
    def is_exception(self) -> bool:
        return self.kind == FlowKind.EXCEPTION


@dataclass(frozen=True)
class UseCase:
    """A use case with its complete nested graph."""

    id: int
    project_id: int
    creator_id: int
    public_id: str
    slug: str
    name: str
    description: str
    trigger: str
    priority: Priority
    primary_actor: Actor
    freq_use: str = ""
    other_info: list[str] = field(default_factory=list)
    assumptions: list[str] = field(default_factory=list)
    secondary_actors: list[Actor] = field(default_factory=list)
    business_rules: list[BusinessRule] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)
    flows: list[Flow] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def normal_flow(self) -> Flow | None:
        """Return the primary success path, if one was authored."""
        return next((f for f in self.flows if f.kind == FlowKind.NORMAL), None)

    def flow_by_public_id(self, public_id: str) -> Flow | None:
        return next((f for f in self.flows if f.public_id == public_id), None)

    def conditions_of(self, kind: ConditionKind) -> list[Condition]:
        return [c for c in self.conditions if c.kind == kind]
