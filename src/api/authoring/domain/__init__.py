"""Domain layer for the authoring context."""

from authoring.domain.entities import (
    Actor,
    BusinessRule,
    Condition,
    Flow,
    Project,
    Reference,
    Step,
    UseCase,
)
from authoring.domain.value_objects import (
    ConditionKind,
    CounterKind,
    FlowKind,
    Mutability,
    OwnerKind,
    Priority,
    ReferenceType,
    RuleType,
)

__all__ = [
    "Actor",
    "BusinessRule",
    "Condition",
    "ConditionKind",
    "CounterKind",
    "Flow",
    "FlowKind",
    "Mutability",
    "OwnerKind",
    "Priority",
    "Project",
    "Reference",
    "ReferenceType",
    "RuleType",
    "Step",
    "UseCase",
]
