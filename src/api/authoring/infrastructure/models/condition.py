"""SQLAlchemy ORM model for the conditions table."""

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class ConditionModel(Base):
    """ORM model for conditions table.

    public_id (``PRE-<n>`` / ``POST-<n>``) is unique within the use case.
    """

    __tablename__ = "conditions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    use_case_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("use_cases.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    public_id: Mapped[str] = mapped_column(String(32), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "use_case_id", "public_id", name="uq_conditions_use_case_public_id"
        ),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ConditionModel(id={self.id}, public_id={self.public_id})>"
