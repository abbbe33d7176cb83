"""SQLAlchemy ORM model for the sequence_counters table."""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class SequenceCounterModel(Base):
    """ORM model for sequence_counters table.

    One row per (owner_kind, owner_id, counter_kind). owner_id points at a
    project or a use case depending on owner_kind, so it carries no foreign
    key; rows are removed explicitly together with their owner.
    """

    __tablename__ = "sequence_counters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    counter_kind: Mapped[str] = mapped_column(String(32), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint(
            "owner_kind",
            "owner_id",
            "counter_kind",
            name="uq_sequence_counters_owner_kind",
        ),
        CheckConstraint("count >= 0", name="ck_sequence_counters_count_non_negative"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<SequenceCounterModel(owner={self.owner_kind}:{self.owner_id}, "
            f"counter_kind={self.counter_kind}, count={self.count})>"
        )
