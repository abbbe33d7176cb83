"""Planning of the flow graph of a use case payload.

Before anything is written, the flows of a payload are validated as a
whole and put in dependency order: a parent flow always precedes the
exception flows hanging off it, because an exception flow's public
identifier is built from its parent's. Everything here is pure.
"""

from __future__ import annotations

import heapq
from collections.abc import Sequence
from dataclasses import dataclass

from authoring.application.payloads import FlowDraftPayload
from authoring.domain.value_objects import FlowKind
from authoring.ports.exceptions import (
    DuplicateNormalFlowError,
    ParentFlowNotFoundError,
    ParentFlowRequiredError,
)


@dataclass(frozen=True)
class PlannedFlow:
    """A flow draft with the position of its parent in the same payload.

    Attributes:
        index: Position of the draft in the payload
        draft: The flow draft itself
        parent_index: Payload position of the parent flow, for exception flows
    """

    index: int
    draft: FlowDraftPayload
    parent_index: int | None = None


def plan_flows(drafts: Sequence[FlowDraftPayload]) -> list[PlannedFlow]:
    """Validate flow drafts and return them parents-first.

    Payload order is kept wherever dependencies allow it: a flow only moves
    behind its own parent, never ahead of an unrelated earlier flow.

    Raises:
        DuplicateNormalFlowError: If more than one normal flow is present
        ParentFlowRequiredError: If an exception flow has no ``parent_key``
        ParentFlowNotFoundError: If a ``parent_key`` matches no flow, or
            exception flows form a cycle
    """
    normal_count = sum(1 for d in drafts if d.kind == FlowKind.NORMAL)
    if normal_count > 1:
        raise DuplicateNormalFlowError()

    index_by_key: dict[str, int] = {}
    for index, draft in enumerate(drafts):
        if draft.key is not None:
            if draft.key in index_by_key:
                raise ValueError(f"Duplicate flow key '{draft.key}'")
            index_by_key[draft.key] = index

    planned: dict[int, PlannedFlow] = {}
    for index, draft in enumerate(drafts):
        parent_index = None
        # Only exception flows hang off a parent.
        if draft.kind == FlowKind.EXCEPTION:
            if draft.parent_key is None:
                raise ParentFlowRequiredError(draft.name)
            parent_index = index_by_key.get(draft.parent_key)
            if parent_index is None or parent_index == index:
                raise ParentFlowNotFoundError(draft.parent_key)
        planned[index] = PlannedFlow(index=index, draft=draft, parent_index=parent_index)

    children: dict[int, list[int]] = {}
    for flow in planned.values():
        if flow.parent_index is not None:
            children.setdefault(flow.parent_index, []).append(flow.index)

    # Among the flows whose parent is already placed, the earliest in the
    # payload goes next.
    ready = [i for i, flow in planned.items() if flow.parent_index is None]
    heapq.heapify(ready)
    ordered: list[PlannedFlow] = []
    while ready:
        index = heapq.heappop(ready)
        ordered.append(planned[index])
        for child in children.get(index, ()):
            heapq.heappush(ready, child)

    if len(ordered) < len(planned):
        placed = {flow.index for flow in ordered}
        stuck = min(i for i in planned if i not in placed)
        raise ParentFlowNotFoundError(drafts[stuck].parent_key)
    return ordered
