"""
Module Completion Model

One row per module a student has finished within an enrollment.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynamix.core.database import Base
from dynamix.models.user import utcnow

if TYPE_CHECKING:
    from dynamix.models.enrollment import Enrollment


class ModuleCompletion(Base):
    """
    Completed module record.

    The (enrollment_id, module_id) unique constraint makes the set of
    completed modules duplicate-free and lets completion be written as an
    insert-if-absent. ``module_id`` may outlive the module it names.

    Attributes:
        id: Integer primary key, gives completion order.
        enrollment_id: Foreign key to enrollments table.
        module_id: Id of the completed module.
        completed_at: When the module was completed.
    """

    __tablename__ = "module_completions"

    __table_args__ = (
        UniqueConstraint("enrollment_id", "module_id", name="uq_enrollment_module"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    enrollment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("enrollments.id", ondelete="CASCADE"),
        nullable=False,
    )
    module_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    # Relationships
    enrollment: Mapped["Enrollment"] = relationship(
        "Enrollment",
        back_populates="completions",
    )

    def __repr__(self) -> str:
        return f"<ModuleCompletion(enrollment_id={self.enrollment_id}, module_id={self.module_id})>"
