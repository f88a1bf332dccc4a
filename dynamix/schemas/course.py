"""
Course Schemas

Pydantic models for course, module and quiz request/response validation.
"""

from typing import List, Optional

from pydantic import Field, model_validator

from dynamix.schemas.base import APIModel


# ============== Quiz Schemas ==============

class QuizQuestionSchema(APIModel):
    """A multiple-choice question attached to a module."""

    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=1)
    correct_answer_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_answer_index(self) -> "QuizQuestionSchema":
        if self.correct_answer_index >= len(self.options):
            raise ValueError(
                f"correctAnswerIndex {self.correct_answer_index} is out of range "
                f"for {len(self.options)} options"
            )
        return self


# ============== Module Schemas ==============

class ModuleSchema(APIModel):
    """A unit of course content. ``id`` is generated when omitted."""

    id: Optional[str] = Field(None, max_length=64)
    title: str = Field(..., min_length=1)
    content: str = ""
    quiz: Optional[List[QuizQuestionSchema]] = None


def check_unique_module_ids(modules: Optional[List[ModuleSchema]]) -> None:
    if not modules:
        return
    ids = [module.id for module in modules if module.id]
    if len(ids) != len(set(ids)):
        raise ValueError("Module ids must be unique within a course")


# ============== Course Schemas ==============

class CourseCreate(APIModel):
    """Schema for creating a course."""

    id: Optional[str] = Field(None, max_length=64, description="Optional caller-chosen id")
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    instructor_id: str = Field(..., min_length=1, max_length=64)
    instructor_name: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    thumbnail_url: Optional[str] = Field(None, max_length=512)
    modules: List[ModuleSchema] = []

    @model_validator(mode="after")
    def check_modules(self) -> "CourseCreate":
        check_unique_module_ids(self.modules)
        return self


class CourseUpdate(APIModel):
    """
    Schema for updating a course.

    Every field is optional; ``modules`` replaces the whole module list.
    Instructor fields are fixed at creation and ignored here.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=255)
    thumbnail_url: Optional[str] = Field(None, max_length=512)
    modules: Optional[List[ModuleSchema]] = None

    @model_validator(mode="after")
    def check_modules(self) -> "CourseUpdate":
        check_unique_module_ids(self.modules)
        return self


class CourseResponse(APIModel):
    """Schema for course response with nested modules."""

    id: str
    title: str
    description: Optional[str] = None
    instructor_id: Optional[str] = None
    instructor_name: Optional[str] = None
    category: Optional[str] = None
    thumbnail_url: Optional[str] = None
    modules: List[ModuleSchema] = []


class DeleteResponse(APIModel):
    """Schema for delete acknowledgements."""

    success: bool = True
