"""Unit tests for the authoring payload models."""

import pytest
from pydantic import ValidationError

from authoring.application.payloads import (
    ExistingRef,
    NewActor,
    NewBusinessRule,
    UseCasePayload,
)
from authoring.domain.value_objects import Priority, ReferenceType, RuleType


class TestTaggedReferences:
    def test_existing_and_new_entries_are_told_apart_by_tag(self):
        payload = UseCasePayload.model_validate(
            {
                "name": "Checkout",
                "primary_actor": {"ref": "existing", "id": 3},
                "secondary_actors": [
                    {"ref": "new", "name": "Payment gateway"},
                    {"ref": "existing", "id": 4},
                ],
                "business_rules": [
                    {"ref": "new", "rule_def": "Orders over 100 ship free", "type": "FACT"},
                ],
            }
        )

        assert payload.primary_actor == ExistingRef(id=3)
        assert isinstance(payload.secondary_actors[0], NewActor)
        assert isinstance(payload.secondary_actors[1], ExistingRef)
        assert isinstance(payload.business_rules[0], NewBusinessRule)
        assert payload.business_rules[0].type == RuleType.FACT

    def test_unknown_tag_is_rejected(self):
        with pytest.raises(ValidationError):
            UseCasePayload.model_validate(
                {"name": "Checkout", "primary_actor": {"ref": "maybe", "id": 3}}
            )

    def test_new_entry_with_id_is_still_new(self):
        """An id on a "new" entry does not turn it into a reference."""
        payload = UseCasePayload.model_validate(
            {"name": "X", "primary_actor": {"ref": "new", "name": "Clerk", "id": 9}}
        )

        assert isinstance(payload.primary_actor, NewActor)


class TestUseCasePayload:
    def test_duplicate_flow_keys_are_rejected(self):
        with pytest.raises(ValidationError, match="flow keys"):
            UseCasePayload(
                name="X",
                primary_actor=ExistingRef(id=1),
                flows=[
                    {"key": "a", "name": "Main", "kind": "NORMAL"},
                    {"key": "a", "name": "Alt", "kind": "ALTERNATE"},
                ],
            )

    def test_details_and_step_specs(self):
        payload = UseCasePayload(
            name="Checkout",
            description="Buy the cart",
            trigger="Customer clicks buy",
            priority=Priority.CRITICAL,
            other_info=["PCI scope"],
            primary_actor=ExistingRef(id=1),
            flows=[
                {
                    "name": "Main",
                    "kind": "NORMAL",
                    "steps": [
                        {
                            "description": "Customer confirms",
                            "references": [{"ref_type": "ACTOR", "ref_id": 1}],
                        }
                    ],
                }
            ],
        )

        details = payload.details()
        assert details.priority == Priority.CRITICAL
        assert details.other_info == ("PCI scope",)

        (step,) = payload.flows[0].step_specs()
        assert step.description == "Customer confirms"
        assert step.references[0].ref_type == ReferenceType.ACTOR
        assert step.references[0].location == 0
