"""Unit tests for flow graph planning."""

import pytest

from authoring.application.graph_builder import plan_flows
from authoring.application.payloads import FlowDraftPayload
from authoring.domain.value_objects import FlowKind
from authoring.ports.exceptions import (
    DuplicateNormalFlowError,
    ParentFlowNotFoundError,
    ParentFlowRequiredError,
)


def _flow(name, kind, key=None, parent_key=None) -> FlowDraftPayload:
    return FlowDraftPayload(name=name, kind=kind, key=key, parent_key=parent_key)


class TestPlanFlows:
    def test_keeps_payload_order_without_dependencies(self):
        drafts = [
            _flow("Main", FlowKind.NORMAL),
            _flow("Alt A", FlowKind.ALTERNATE),
            _flow("Alt B", FlowKind.ALTERNATE),
        ]

        plan = plan_flows(drafts)

        assert [p.index for p in plan] == [0, 1, 2]
        assert all(p.parent_index is None for p in plan)

    def test_parent_is_planned_before_exception_listed_first(self):
        drafts = [
            _flow("Card declined", FlowKind.EXCEPTION, parent_key="alt"),
            _flow("Pay by card", FlowKind.ALTERNATE, key="alt"),
        ]

        plan = plan_flows(drafts)

        assert [p.draft.name for p in plan] == ["Pay by card", "Card declined"]
        assert plan[1].parent_index == 1

    def test_exception_listed_first_does_not_pull_its_parent_forward(self):
        drafts = [
            _flow("Timeout", FlowKind.EXCEPTION, parent_key="b"),
            _flow("Alt A", FlowKind.ALTERNATE, key="a"),
            _flow("Alt B", FlowKind.ALTERNATE, key="b"),
        ]

        plan = plan_flows(drafts)

        assert [p.draft.name for p in plan] == ["Alt A", "Alt B", "Timeout"]
        assert plan[2].parent_index == 2

    def test_exception_of_exception_is_ordered_transitively(self):
        drafts = [
            _flow("Deep", FlowKind.EXCEPTION, key="e2", parent_key="e1"),
            _flow("Shallow", FlowKind.EXCEPTION, key="e1", parent_key="main"),
            _flow("Main", FlowKind.NORMAL, key="main"),
        ]

        plan = plan_flows(drafts)

        assert [p.draft.name for p in plan] == ["Main", "Shallow", "Deep"]

    def test_empty_payload(self):
        assert plan_flows([]) == []

    def test_two_normal_flows_are_rejected(self):
        drafts = [_flow("Main", FlowKind.NORMAL), _flow("Other", FlowKind.NORMAL)]

        with pytest.raises(DuplicateNormalFlowError):
            plan_flows(drafts)

    def test_exception_without_parent_key(self):
        with pytest.raises(ParentFlowRequiredError) as exc_info:
            plan_flows([_flow("Oops", FlowKind.EXCEPTION)])

        assert exc_info.value.flow_name == "Oops"

    def test_unknown_parent_key(self):
        with pytest.raises(ParentFlowNotFoundError) as exc_info:
            plan_flows([_flow("Oops", FlowKind.EXCEPTION, parent_key="missing")])

        assert exc_info.value.parent == "missing"

    def test_self_parent_is_not_found(self):
        with pytest.raises(ParentFlowNotFoundError):
            plan_flows([_flow("Loop", FlowKind.EXCEPTION, key="x", parent_key="x")])

    def test_cycle_is_rejected(self):
        drafts = [
            _flow("A", FlowKind.EXCEPTION, key="a", parent_key="b"),
            _flow("B", FlowKind.EXCEPTION, key="b", parent_key="a"),
        ]

        with pytest.raises(ParentFlowNotFoundError):
            plan_flows(drafts)

    def test_parent_key_ignored_for_alternate_flows(self):
        drafts = [
            _flow("Main", FlowKind.NORMAL, key="main"),
            _flow("Alt", FlowKind.ALTERNATE, parent_key="main"),
        ]

        plan = plan_flows(drafts)

        assert plan[1].parent_index is None
