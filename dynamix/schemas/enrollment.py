"""
Enrollment Schemas

Pydantic models for enrollment, module completion and quiz submissions.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from dynamix.schemas.base import APIModel


class EnrollRequest(APIModel):
    """Schema for enrolling a student in a course."""

    user_id: str = Field(..., min_length=1, max_length=64, description="Student user ID")
    course_id: str = Field(..., min_length=1, max_length=64, description="Course ID")


class ProgressUpdate(APIModel):
    """Schema for marking a module complete."""

    user_id: str = Field(..., min_length=1, max_length=64)
    course_id: str = Field(..., min_length=1, max_length=64)
    module_id: str = Field(..., min_length=1, max_length=64)


class QuizSubmission(APIModel):
    """
    Schema for quiz answer submission.

    ``answers[i]`` is the selected option index for question ``i``;
    missing or null entries count as wrong.
    """

    user_id: str = Field(..., min_length=1, max_length=64)
    course_id: str = Field(..., min_length=1, max_length=64)
    module_id: str = Field(..., min_length=1, max_length=64)
    answers: List[Optional[int]] = Field(default_factory=list)


class EnrollmentResponse(APIModel):
    """Schema for enrollment response."""

    id: int
    user_id: str
    course_id: str
    progress: int
    completed_module_ids: List[str] = []
    enrolled_at: Optional[datetime] = None
    last_active_at: Optional[datetime] = None


class QuizResult(APIModel):
    """Schema for quiz submission result."""

    module_id: str
    score: int  # Percentage
    passed: bool
    correct_count: int
    total_questions: int
    message: str
    enrollment: EnrollmentResponse
