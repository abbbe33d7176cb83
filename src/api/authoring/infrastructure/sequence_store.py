"""SQL implementation of ISequenceStore.

Allocation is a single ``UPDATE ... SET count = count + 1 ... RETURNING
count`` statement. The database takes a row lock for the update and holds it
until the surrounding transaction ends, so two transactions allocating from
the same counter are serialised and can never observe the same value. A
rolled back transaction also rolls back its increment, so aborted operations
consume no identifiers.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from authoring.domain.value_objects import CounterKind, OwnerKind
from authoring.infrastructure.models import SequenceCounterModel
from authoring.infrastructure.observability import (
    DefaultSequenceStoreProbe,
    SequenceStoreProbe,
)
from authoring.ports.exceptions import CounterNotFoundError
from authoring.ports.repositories import ISequenceStore


class SequenceStore(ISequenceStore):
    """Counter rows keyed by (owner kind, owner id, counter kind)."""

    def __init__(self, probe: SequenceStoreProbe | None = None) -> None:
        self._probe = probe or DefaultSequenceStoreProbe()

    async def create_counters(
        self,
        session: AsyncSession,
        owner_id: int,
        owner_kind: OwnerKind,
        counter_kinds: Sequence[CounterKind],
    ) -> None:
        """Create one zeroed counter row per kind for a new owner."""
        if not counter_kinds:
            return
        await session.execute(
            insert(SequenceCounterModel),
            [
                {
                    "owner_kind": owner_kind.value,
                    "owner_id": owner_id,
                    "counter_kind": kind.value,
                    "count": 0,
                }
                for kind in counter_kinds
            ],
        )
        self._probe.counters_created(owner_kind.value, owner_id, len(counter_kinds))

    async def next_value(
        self,
        session: AsyncSession,
        owner_id: int,
        owner_kind: OwnerKind,
        counter_kind: CounterKind,
    ) -> int:
        """Atomically increment the counter and return the new value.

        Must run inside an open write transaction.

        Raises:
            CounterNotFoundError: If the owner has no counter of that kind
        """
        stmt = (
            update(SequenceCounterModel)
            .where(
                SequenceCounterModel.owner_kind == owner_kind.value,
                SequenceCounterModel.owner_id == owner_id,
                SequenceCounterModel.counter_kind == counter_kind.value,
            )
            .values(count=SequenceCounterModel.count + 1)
            .returning(SequenceCounterModel.count)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        value = result.scalar_one_or_none()

        if value is None:
            self._probe.counter_missing(owner_kind.value, owner_id, counter_kind.value)
            raise CounterNotFoundError(owner_kind.value, owner_id, counter_kind.value)

        self._probe.counter_incremented(
            owner_kind.value, owner_id, counter_kind.value, value
        )
        return value

    async def current_value(
        self,
        session: AsyncSession,
        owner_id: int,
        owner_kind: OwnerKind,
        counter_kind: CounterKind,
    ) -> int | None:
        """Return the counter's current value, or None if the row is missing."""
        stmt = select(SequenceCounterModel.count).where(
            SequenceCounterModel.owner_kind == owner_kind.value,
            SequenceCounterModel.owner_id == owner_id,
            SequenceCounterModel.counter_kind == counter_kind.value,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_counters(
        self, session: AsyncSession, owner_id: int, owner_kind: OwnerKind
    ) -> None:
        """Delete every counter row of an owner."""
        await session.execute(
            delete(SequenceCounterModel)
            .where(
                SequenceCounterModel.owner_kind == owner_kind.value,
                SequenceCounterModel.owner_id == owner_id,
            )
            .execution_options(synchronize_session=False)
        )
        self._probe.counters_deleted(owner_kind.value, owner_id)
