"""
Course Model

Course definition with its ordered modules and quizzes stored as one
JSON document, so the nested structure is always written as a unit.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from dynamix.core.database import Base
from dynamix.models.user import utcnow


class Course(Base):
    """
    Course model owned by one teacher.

    ``modules`` is a list of dicts shaped like ModuleSchema:
    ``{"id", "title", "content", "quiz": [{"question", "options",
    "correct_answer_index"}]}``. Its order drives progress.

    Attributes:
        id: Opaque string primary key (caller supplied or generated).
        title: Course title.
        description: Course description.
        instructor_id: Owner user id, copied at creation.
        instructor_name: Owner display name, copied at creation.
        category: Free-form category label.
        thumbnail_url: Cover image URL.
        modules: Ordered module documents.
        created_at: Insertion timestamp, defines catalog order.
    """

    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
    )
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    instructor_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        index=True,
        nullable=True,
    )
    instructor_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    category: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    thumbnail_url: Mapped[Optional[str]] = mapped_column(
        String(512),
        nullable=True,
    )
    modules: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        default=list,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    @property
    def module_count(self) -> int:
        return len(self.modules or [])

    def find_module(self, module_id: str) -> Optional[Dict[str, Any]]:
        """Return the module document with the given id, if any."""
        for module in self.modules or []:
            if module.get("id") == module_id:
                return module
        return None

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title[:30]}...)>"
