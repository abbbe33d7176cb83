"""Unit tests for RelationResolver."""

import pytest
from unittest.mock import AsyncMock, create_autospec

from authoring.application.payloads import (
    ExistingRef,
    NewActor,
    NewBusinessRule,
    UseCasePayload,
)
from authoring.application.relation_resolver import (
    Connect,
    CreateActor,
    CreateBusinessRule,
    RelationResolver,
)
from authoring.domain.value_objects import Mutability, RuleType
from authoring.ports.exceptions import ForeignOwnershipError, ReferenceNotFoundError
from authoring.ports.repositories import IOwnershipLookup, OwnedRef

PROJECT_ID = 1
OTHER_PROJECT_ID = 2


@pytest.fixture
def mock_lookup():
    """Ownership lookup knowing actors 10/11 and rule 20 in project 1, 99 in project 2."""
    lookup = create_autospec(IOwnershipLookup, instance=True)
    actors = {
        10: OwnedRef(id=10, owner_id=PROJECT_ID),
        11: OwnedRef(id=11, owner_id=PROJECT_ID),
        99: OwnedRef(id=99, owner_id=OTHER_PROJECT_ID),
    }
    rules = {
        20: OwnedRef(id=20, owner_id=PROJECT_ID),
        98: OwnedRef(id=98, owner_id=OTHER_PROJECT_ID),
    }
    lookup.find_actor = AsyncMock(side_effect=lambda session, actor_id: actors.get(actor_id))
    lookup.find_business_rule = AsyncMock(
        side_effect=lambda session, rule_id: rules.get(rule_id)
    )
    return lookup


@pytest.fixture
def resolver(mock_lookup) -> RelationResolver:
    return RelationResolver(mock_lookup)


class TestResolve:
    @pytest.mark.asyncio
    async def test_mixes_connect_and_create(self, resolver, mock_session):
        payload = UseCasePayload(
            name="Checkout",
            primary_actor=ExistingRef(id=10),
            secondary_actors=[NewActor(name="Gateway"), ExistingRef(id=11)],
            business_rules=[
                ExistingRef(id=20),
                NewBusinessRule(rule_def="No refunds", type=RuleType.CONSTRAINT),
            ],
        )

        result = await resolver.resolve(mock_session, PROJECT_ID, payload)

        assert result.primary_actor == Connect(id=10)
        assert result.secondary_actors == (
            CreateActor(name="Gateway", description=None),
            Connect(id=11),
        )
        assert result.business_rules == (
            Connect(id=20),
            CreateBusinessRule(
                rule_def="No refunds",
                type=RuleType.CONSTRAINT,
                mutability=Mutability.STATIC,
                source="",
            ),
        )

    @pytest.mark.asyncio
    async def test_passes_session_to_lookup(self, resolver, mock_lookup, mock_session):
        payload = UseCasePayload(name="X", primary_actor=ExistingRef(id=10))

        await resolver.resolve(mock_session, PROJECT_ID, payload)

        mock_lookup.find_actor.assert_awaited_once_with(mock_session, 10)

    @pytest.mark.asyncio
    async def test_new_primary_actor_needs_no_lookup(
        self, resolver, mock_lookup, mock_session
    ):
        payload = UseCasePayload(name="X", primary_actor=NewActor(name="Clerk"))

        result = await resolver.resolve(mock_session, PROJECT_ID, payload)

        assert result.primary_actor == CreateActor(name="Clerk")
        mock_lookup.find_actor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foreign_primary_actor(self, resolver, mock_session):
        payload = UseCasePayload(name="X", primary_actor=ExistingRef(id=99))

        with pytest.raises(ForeignOwnershipError) as exc_info:
            await resolver.resolve(mock_session, PROJECT_ID, payload)

        assert exc_info.value.entity == "Actor"
        assert exc_info.value.expected_owner_id == PROJECT_ID
        assert exc_info.value.actual_owner_id == OTHER_PROJECT_ID

    @pytest.mark.asyncio
    async def test_foreign_secondary_actor_in_last_position(self, resolver, mock_session):
        payload = UseCasePayload(
            name="X",
            primary_actor=ExistingRef(id=10),
            secondary_actors=[ExistingRef(id=11), ExistingRef(id=99)],
        )

        with pytest.raises(ForeignOwnershipError):
            await resolver.resolve(mock_session, PROJECT_ID, payload)

    @pytest.mark.asyncio
    async def test_foreign_business_rule(self, resolver, mock_session):
        payload = UseCasePayload(
            name="X",
            primary_actor=ExistingRef(id=10),
            business_rules=[ExistingRef(id=98)],
        )

        with pytest.raises(ForeignOwnershipError) as exc_info:
            await resolver.resolve(mock_session, PROJECT_ID, payload)

        assert exc_info.value.entity == "BusinessRule"

    @pytest.mark.asyncio
    async def test_unknown_actor(self, resolver, mock_session):
        payload = UseCasePayload(name="X", primary_actor=ExistingRef(id=12345))

        with pytest.raises(ReferenceNotFoundError) as exc_info:
            await resolver.resolve(mock_session, PROJECT_ID, payload)

        assert exc_info.value.entity_id == 12345
