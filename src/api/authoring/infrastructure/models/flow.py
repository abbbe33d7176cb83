"""SQLAlchemy ORM models for flows, steps and step references.

Step references point at flows and conditions by id, so ids of these tables
are never handed out twice (AUTOINCREMENT on SQLite).
"""

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class FlowModel(Base):
    """ORM model for flows table.

    Foreign Key Constraints:
    - use_case_id references use_cases.id with CASCADE delete
    - parent_flow_id references flows.id with CASCADE delete
      Exception flows disappear with the flow they branch from

    Partial Unique Index:
    - Only one NORMAL flow per use case
    """

    __tablename__ = "flows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    use_case_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("use_cases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    public_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    parent_flow_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("flows.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("use_case_id", "public_id", name="uq_flows_use_case_public_id"),
        Index(
            "idx_flows_normal_unique",
            "use_case_id",
            unique=True,
            postgresql_where=text("kind = 'NORMAL'"),
            sqlite_where=text("kind = 'NORMAL'"),
        ),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<FlowModel(id={self.id}, public_id={self.public_id}, kind={self.kind})>"
        )


class StepModel(Base):
    """ORM model for steps table.

    public_id is positional (``<position>.``) and rewritten whenever the
    owning flow is written.
    """

    __tablename__ = "steps"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    flow_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("flows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    public_id: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<StepModel(id={self.id}, flow_id={self.flow_id}, "
            f"public_id={self.public_id})>"
        )


class StepReferenceModel(Base):
    """ORM model for step_references table."""

    __tablename__ = "step_references"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    step_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("steps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ref_type: Mapped[str] = mapped_column(String(32), nullable=False)
    ref_id: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<StepReferenceModel(id={self.id}, step_id={self.step_id}, "
            f"ref_type={self.ref_type}, ref_id={self.ref_id})>"
        )
