"""Unit tests for the use case entity helpers."""

from authoring.domain.entities import Actor, Condition, Flow, UseCase
from authoring.domain.value_objects import ConditionKind, FlowKind, Priority


def _use_case(flows=(), conditions=()) -> UseCase:
    return UseCase(
        id=1,
        project_id=1,
        creator_id=1,
        public_id="UC-1",
        slug="1-UC-1:checkout",
        name="Checkout",
        description="",
        trigger="",
        priority=Priority.HIGH,
        primary_actor=Actor(id=1, project_id=1, name="Customer"),
        flows=list(flows),
        conditions=list(conditions),
    )


def test_normal_flow_is_found_among_flows():
    normal = Flow(id=2, use_case_id=1, public_id="UC-1.0", name="Main", kind=FlowKind.NORMAL)
    alt = Flow(id=3, use_case_id=1, public_id="UC-1.1", name="Alt", kind=FlowKind.ALTERNATE)

    use_case = _use_case(flows=[alt, normal])

    assert use_case.normal_flow is normal
    assert use_case.flow_by_public_id("UC-1.1") is alt
    assert use_case.flow_by_public_id("UC-1.9") is None


def test_normal_flow_absent():
    assert _use_case().normal_flow is None


def test_conditions_of_filters_by_kind():
    pre = Condition(id=1, use_case_id=1, public_id="PRE-1", kind=ConditionKind.PRECONDITION, description="a")
    post = Condition(id=2, use_case_id=1, public_id="POST-1", kind=ConditionKind.POSTCONDITION, description="b")

    use_case = _use_case(conditions=[pre, post])

    assert use_case.conditions_of(ConditionKind.PRECONDITION) == [pre]
    assert use_case.conditions_of(ConditionKind.POSTCONDITION) == [post]


def test_exception_flag():
    flow = Flow(id=1, use_case_id=1, public_id="UC-1.0.E1", name="Err", kind=FlowKind.EXCEPTION, parent_flow_id=2)
    assert flow.is_exception
