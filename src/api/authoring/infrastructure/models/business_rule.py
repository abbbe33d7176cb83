"""SQLAlchemy ORM model for the business_rules table."""

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class BusinessRuleModel(Base):
    """ORM model for business_rules table.

    public_id (``BR-<n>``) is unique within the owning project.
    """

    __tablename__ = "business_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    public_id: Mapped[str] = mapped_column(String(32), nullable=False)
    rule_def: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    mutability: Mapped[str] = mapped_column(String(16), nullable=False)
    source: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "project_id", "public_id", name="uq_business_rules_project_public_id"
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<BusinessRuleModel(id={self.id}, project_id={self.project_id}, "
            f"public_id={self.public_id})>"
        )
