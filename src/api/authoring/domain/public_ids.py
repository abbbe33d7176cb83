"""Composition of human-readable public identifiers.

Pure functions turning an allocated counter value, plus the identifier of
an ancestor where the shape requires one, into the display string of an
entity. Identifiers are hierarchical so that ``UC-3.1.E1`` reads as the
first exception flow hanging off alternate flow ``UC-3.1`` of ``UC-3``.

Counter allocation itself lives in the sequence store; nothing in this
module touches storage.
"""

from __future__ import annotations

from authoring.domain.value_objects import ConditionKind, CounterKind, FlowKind

USE_CASE_PREFIX = "UC"
BUSINESS_RULE_PREFIX = "BR"
PRECONDITION_PREFIX = "PRE"
POSTCONDITION_PREFIX = "POST"
NORMAL_FLOW_SUFFIX = "0"
EXCEPTION_FLOW_MARKER = "E"


def _require_positive(value: int) -> None:
    if value < 1:
        raise ValueError(f"Counter values start at 1, got {value}")


def use_case_public_id(value: int) -> str:
    """Return ``UC-<n>``."""
    _require_positive(value)
    return f"{USE_CASE_PREFIX}-{value}"


def business_rule_public_id(value: int) -> str:
    """Return ``BR-<n>``."""
    _require_positive(value)
    return f"{BUSINESS_RULE_PREFIX}-{value}"


def condition_public_id(kind: ConditionKind, value: int) -> str:
    """Return ``PRE-<n>`` or ``POST-<n>`` depending on the condition kind."""
    _require_positive(value)
    prefix = (
        PRECONDITION_PREFIX
        if kind == ConditionKind.PRECONDITION
        else POSTCONDITION_PREFIX
    )
    return f"{prefix}-{value}"


def normal_flow_public_id(use_case_public_id: str) -> str:
    """Return ``<use case>.0``; a use case has at most one normal flow."""
    return f"{use_case_public_id}.{NORMAL_FLOW_SUFFIX}"


def alternate_flow_public_id(use_case_public_id: str, value: int) -> str:
    """Return ``<use case>.<n>``."""
    _require_positive(value)
    return f"{use_case_public_id}.{value}"


def exception_flow_public_id(parent_flow_public_id: str, value: int) -> str:
    """Return ``<parent flow>.E<n>``.

    Built from the parent flow's identifier, not the use case's, so
    exception flows nest under whichever flow they branch from.
    """
    _require_positive(value)
    return f"{parent_flow_public_id}.{EXCEPTION_FLOW_MARKER}{value}"


def flow_public_id(
    kind: FlowKind,
    use_case_public_id: str,
    value: int | None = None,
    parent_flow_public_id: str | None = None,
) -> str:
    """Compose the identifier of a flow of any kind.

    Args:
        kind: Flow kind
        use_case_public_id: Identifier of the owning use case
        value: Allocated counter value (alternate and exception flows)
        parent_flow_public_id: Identifier of the parent flow (exception flows)

    Raises:
        ValueError: If a value or parent required by the kind is missing
    """
    if kind == FlowKind.NORMAL:
        return normal_flow_public_id(use_case_public_id)
    if value is None:
        raise ValueError(f"{kind.value} flows need an allocated counter value")
    if kind == FlowKind.ALTERNATE:
        return alternate_flow_public_id(use_case_public_id, value)
    if parent_flow_public_id is None:
        raise ValueError("Exception flows need the parent flow's public id")
    return exception_flow_public_id(parent_flow_public_id, value)


def step_public_id(position: int) -> str:
    """Return the positional identifier ``<n>.`` for a 1-based step position."""
    _require_positive(position)
    return f"{position}."


def counter_kind_for_condition(kind: ConditionKind) -> CounterKind:
    """Return the use case counter feeding conditions of ``kind``."""
    if kind == ConditionKind.PRECONDITION:
        return CounterKind.PRECONDITION
    return CounterKind.POSTCONDITION


def counter_kind_for_flow(kind: FlowKind) -> CounterKind | None:
    """Return the use case counter feeding flows of ``kind``.

    Normal flows consume no counter and yield ``None``.
    """
    if kind == FlowKind.ALTERNATE:
        return CounterKind.ALTERNATE_FLOW
    if kind == FlowKind.EXCEPTION:
        return CounterKind.EXCEPTION_FLOW
    return None
