"""
Enrollment Model

User-course enrollment with derived progress.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynamix.core.database import Base
from dynamix.models.user import utcnow

if TYPE_CHECKING:
    from dynamix.models.module_completion import ModuleCompletion


class Enrollment(Base):
    """
    Enrollment model representing a student taking a course.

    Unique constraint ensures a user can only enroll once per course.
    ``course_id`` is not a foreign key: deleting a course leaves its
    enrollments in place.

    Attributes:
        id: Integer primary key.
        user_id: Foreign key to users table.
        course_id: Id of the enrolled course.
        progress: Percentage of the course's modules completed (0-100).
        enrolled_at: Timestamp of enrollment.
        last_active_at: Timestamp of the last completion.
    """

    __tablename__ = "enrollments"

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_user_course"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    course_id: Mapped[str] = mapped_column(
        String(64),
        index=True,
        nullable=False,
    )
    progress: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    last_active_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    # Relationships
    completions: Mapped[list["ModuleCompletion"]] = relationship(
        "ModuleCompletion",
        back_populates="enrollment",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ModuleCompletion.id",
    )

    @property
    def completed_module_ids(self) -> list[str]:
        """Completed module ids in completion order."""
        return [completion.module_id for completion in self.completions]

    def __repr__(self) -> str:
        return f"<Enrollment(id={self.id}, user_id={self.user_id}, course_id={self.course_id})>"
