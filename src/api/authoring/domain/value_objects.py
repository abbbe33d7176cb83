"""Value objects for the authoring domain.

Enumerations shared by the entities, the payload models and the ORM layer
(values are stored verbatim in the database), and the immutable field
bundles handed to repositories when writing nested entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class OwnerKind(StrEnum):
    """Kind of entity a sequence counter is scoped to."""

    PROJECT = "PROJECT"
    USE_CASE = "USE_CASE"


class CounterKind(StrEnum):
    """Kind of public identifier a sequence counter produces."""

    USE_CASE = "USE_CASE"
    BUSINESS_RULE = "BUSINESS_RULE"
    PRECONDITION = "PRECONDITION"
    POSTCONDITION = "POSTCONDITION"
    ALTERNATE_FLOW = "ALTERNATE_FLOW"
    EXCEPTION_FLOW = "EXCEPTION_FLOW"


# Counter rows created eagerly alongside their owner.
PROJECT_COUNTER_KINDS: tuple[CounterKind, ...] = (
    CounterKind.USE_CASE,
    CounterKind.BUSINESS_RULE,
)
USE_CASE_COUNTER_KINDS: tuple[CounterKind, ...] = (
    CounterKind.PRECONDITION,
    CounterKind.POSTCONDITION,
    CounterKind.ALTERNATE_FLOW,
    CounterKind.EXCEPTION_FLOW,
)


class FlowKind(StrEnum):
    """Kind of a use case flow."""

    NORMAL = "NORMAL"
    ALTERNATE = "ALTERNATE"
    EXCEPTION = "EXCEPTION"


class ConditionKind(StrEnum):
    """Kind of a use case condition."""

    PRECONDITION = "PRECONDITION"
    POSTCONDITION = "POSTCONDITION"


class Priority(StrEnum):
    """Priority of a use case."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class RuleType(StrEnum):
    """Classification of a business rule."""

    FACT = "FACT"
    CONSTRAINT = "CONSTRAINT"
    ACTION_ENABLER = "ACTION_ENABLER"
    INFERENCE = "INFERENCE"
    COMPUTATION = "COMPUTATION"


class Mutability(StrEnum):
    """How likely a business rule is to change."""

    STATIC = "STATIC"
    DYNAMIC = "DYNAMIC"


class ReferenceType(StrEnum):
    """Kind of entity a step reference points at."""

    ACTOR = "ACTOR"
    BUSINESS_RULE = "BUSINESS_RULE"
    CONDITION = "CONDITION"
    FLOW = "FLOW"
    USE_CASE = "USE_CASE"


@dataclass(frozen=True)
class ReferenceSpec:
    """Fields of a step reference about to be written."""

    ref_type: ReferenceType
    ref_id: int
    location: int


@dataclass(frozen=True)
class StepSpec:
    """Fields of a step about to be written, in flow order."""

    description: str
    references: tuple[ReferenceSpec, ...] = ()


@dataclass(frozen=True)
class UseCaseDetails:
    """Descriptive fields of a use case, written as-is on create and update."""

    name: str
    description: str
    trigger: str
    priority: Priority
    freq_use: str = ""
    other_info: tuple[str, ...] = ()
    assumptions: tuple[str, ...] = ()
