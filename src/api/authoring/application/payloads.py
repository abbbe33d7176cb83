"""Input payloads for authoring operations.

Nested actor and business rule entries are tagged variants: ``ref`` is
``"existing"`` for an attach-by-id entry and ``"new"`` for an entry that
creates the entity inside the current project. The tag, not the presence of
an ``id`` field, decides which path the resolver takes.

Payloads are assumed to be validated for field content by the caller; the
models here only fix their shape.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

from authoring.domain.value_objects import (
    ConditionKind,
    FlowKind,
    Mutability,
    Priority,
    ReferenceSpec,
    ReferenceType,
    RuleType,
    StepSpec,
    UseCaseDetails,
)


class ExistingRef(BaseModel):
    """Attach an entity that already exists in the project."""

    ref: Literal["existing"] = "existing"
    id: int = Field(..., description="Id of the entity to attach")


class NewActor(BaseModel):
    """Create an actor in the use case's project."""

    ref: Literal["new"] = "new"
    name: str
    description: str | None = None


class NewBusinessRule(BaseModel):
    """Create a business rule in the use case's project."""

    ref: Literal["new"] = "new"
    rule_def: str
    type: RuleType
    mutability: Mutability = Mutability.STATIC
    source: str = ""


ActorRef = Annotated[ExistingRef | NewActor, Field(discriminator="ref")]
BusinessRuleRef = Annotated[ExistingRef | NewBusinessRule, Field(discriminator="ref")]


class ReferencePayload(BaseModel):
    """A step's pointer to another entity."""

    ref_type: ReferenceType
    ref_id: int
    location: int = 0

    def to_spec(self) -> ReferenceSpec:
        return ReferenceSpec(
            ref_type=self.ref_type, ref_id=self.ref_id, location=self.location
        )


class StepPayload(BaseModel):
    """A step; its identifier comes from its position in the flow."""

    description: str
    references: list[ReferencePayload] = Field(default_factory=list)

    def to_spec(self) -> StepSpec:
        return StepSpec(
            description=self.description,
            references=tuple(r.to_spec() for r in self.references),
        )


class ConditionPayload(BaseModel):
    """A pre- or postcondition to create."""

    kind: ConditionKind
    description: str


class BusinessRulePayload(BaseModel):
    """A business rule created directly under a project."""

    rule_def: str
    type: RuleType
    mutability: Mutability = Mutability.STATIC
    source: str = ""


class FlowDraftPayload(BaseModel):
    """A flow nested inside a use case payload.

    Exception flows point at their parent through ``parent_key``, which
    must match the ``key`` of another flow in the same payload. Keys are
    local to the payload and never persisted.
    """

    key: str | None = None
    name: str
    kind: FlowKind
    parent_key: str | None = None
    steps: list[StepPayload] = Field(default_factory=list)

    def step_specs(self) -> tuple[StepSpec, ...]:
        return tuple(step.to_spec() for step in self.steps)


class FlowPayload(BaseModel):
    """A flow added to an already persisted use case.

    Exception flows name their parent by database id.
    """

    name: str
    kind: FlowKind
    parent_flow_id: int | None = None
    steps: list[StepPayload] = Field(default_factory=list)

    def step_specs(self) -> tuple[StepSpec, ...]:
        return tuple(step.to_spec() for step in self.steps)


class UseCasePayload(BaseModel):
    """Full use case graph, used for both create and update.

    On update, conditions and flows replace the existing ones wholesale and
    the actor and business rule links are rebuilt from this payload.
    """

    name: str
    description: str = ""
    trigger: str = ""
    priority: Priority = Priority.MEDIUM
    freq_use: str = ""
    other_info: list[str] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    primary_actor: ActorRef
    secondary_actors: list[ActorRef] = Field(default_factory=list)
    business_rules: list[BusinessRuleRef] = Field(default_factory=list)
    conditions: list[ConditionPayload] = Field(default_factory=list)
    flows: list[FlowDraftPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_flow_keys(self) -> UseCasePayload:
        """Flow keys must be unique so that parent links are unambiguous."""
        keys = [f.key for f in self.flows if f.key is not None]
        if len(keys) != len(set(keys)):
            raise ValueError("flow keys must be unique within a use case payload")
        return self

    def details(self) -> UseCaseDetails:
        return UseCaseDetails(
            name=self.name,
            description=self.description,
            trigger=self.trigger,
            priority=self.priority,
            freq_use=self.freq_use,
            other_info=tuple(self.other_info),
            assumptions=tuple(self.assumptions),
        )
