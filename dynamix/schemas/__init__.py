"""
Dynamix LMS - Schemas Module

Pydantic models for request/response validation.
"""

from dynamix.schemas.user import (
    AuthResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from dynamix.schemas.token import TokenPayload
from dynamix.schemas.course import (
    QuizQuestionSchema,
    ModuleSchema,
    CourseCreate,
    CourseUpdate,
    CourseResponse,
    DeleteResponse,
)
from dynamix.schemas.enrollment import (
    EnrollRequest,
    ProgressUpdate,
    QuizSubmission,
    EnrollmentResponse,
    QuizResult,
)

__all__ = [
    # User
    "AuthResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
    # Token
    "TokenPayload",
    # Course
    "QuizQuestionSchema",
    "ModuleSchema",
    "CourseCreate",
    "CourseUpdate",
    "CourseResponse",
    "DeleteResponse",
    # Enrollment
    "EnrollRequest",
    "ProgressUpdate",
    "QuizSubmission",
    "EnrollmentResponse",
    "QuizResult",
]
