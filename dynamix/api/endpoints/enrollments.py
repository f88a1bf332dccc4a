"""
Enrollment Routes

Endpoints for enrolling students, tracking module completion and
submitting module quizzes.
"""

from typing import Optional

from fastapi import APIRouter, Query, Response, status

from dynamix.api.deps import DbSession
from dynamix.core.exceptions import BadRequestError
from dynamix.models.enrollment import Enrollment
from dynamix.schemas.enrollment import (
    EnrollmentResponse,
    EnrollRequest,
    ProgressUpdate,
    QuizResult,
    QuizSubmission,
)
from dynamix.services import enrollment_service


router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.get(
    "",
    response_model=list[EnrollmentResponse],
    summary="Get a user's enrollments",
)
async def list_enrollments(
    db: DbSession,
    user_id: Optional[str] = Query(None, alias="userId", description="Student ID"),
) -> list[Enrollment]:
    """
    Get all enrollments of a user.

    Raises:
        HTTPException: 400 if userId is missing.
    """
    if not user_id:
        raise BadRequestError("userId required")

    return await enrollment_service.list_enrollments_by_user(user_id, db)


@router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll in a course",
)
async def enroll(
    data: EnrollRequest,
    response: Response,
    db: DbSession,
) -> Enrollment:
    """
    Enroll a student in a course.

    Safe to repeat: an existing enrollment is returned with 200 instead
    of 201.

    Raises:
        HTTPException: 404 if the user or course does not exist.
        HTTPException: 400 if the user is not a student.
    """
    enrollment, created = await enrollment_service.enroll(data.user_id, data.course_id, db)
    if not created:
        response.status_code = status.HTTP_200_OK
    return enrollment


@router.put(
    "/progress",
    response_model=EnrollmentResponse,
    summary="Mark a module as complete",
)
async def complete_module(
    data: ProgressUpdate,
    db: DbSession,
) -> Enrollment:
    """
    Record a completed module and recompute progress.

    Completing the same module twice changes nothing.

    Raises:
        HTTPException: 404 if the enrollment does not exist.
    """
    return await enrollment_service.complete_module(
        data.user_id, data.course_id, data.module_id, db
    )


@router.post(
    "/quiz",
    response_model=QuizResult,
    summary="Submit quiz answers",
)
async def submit_quiz(
    data: QuizSubmission,
    db: DbSession,
) -> QuizResult:
    """
    Grade a module quiz.

    **Grading:**
    - ``answers[i]`` is the chosen option index for question ``i``
    - Score >= QUIZ_PASS_THRESHOLD (75%) = passed, and the module is
      marked complete

    **Answer Format:**
    ```json
    {
      "userId": "s1",
      "courseId": "c1",
      "moduleId": "m1",
      "answers": [1, 2]
    }
    ```

    Raises:
        HTTPException: 404 if enrollment, course or module is missing.
        HTTPException: 400 if the module has no quiz.
    """
    result = await enrollment_service.submit_quiz(
        data.user_id, data.course_id, data.module_id, data.answers, db
    )
    result["enrollment"] = EnrollmentResponse.model_validate(result["enrollment"])
    return QuizResult.model_validate(result)
