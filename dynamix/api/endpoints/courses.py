"""
Course Routes

Endpoints for the course catalog and course authoring.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from dynamix.api.deps import DbSession
from dynamix.models.course import Course
from dynamix.schemas.course import (
    CourseCreate,
    CourseResponse,
    CourseUpdate,
    DeleteResponse,
)
from dynamix.services import course_service


router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get(
    "",
    response_model=list[CourseResponse],
    summary="List all courses",
)
async def list_courses(
    db: DbSession,
    instructor_id: Optional[str] = Query(
        None, alias="instructorId", description="Only courses owned by this teacher"
    ),
) -> list[Course]:
    """
    Get every course in the catalog, oldest first.
    """
    return await course_service.list_courses(db, instructor_id=instructor_id)


@router.get(
    "/{course_id}",
    response_model=CourseResponse,
    summary="Get course details",
)
async def get_course(
    course_id: str,
    db: DbSession,
) -> Course:
    """
    Get a course with its modules and quizzes.

    Raises:
        HTTPException: 404 if the course does not exist.
    """
    return await course_service.get_course_or_404(course_id, db)


@router.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
)
async def create_course(
    course_data: CourseCreate,
    db: DbSession,
) -> Course:
    """
    Create a course with its modules.

    **Requirements:**
    - instructorId must name an existing teacher
    - Every quiz question's correctAnswerIndex must index its options

    Raises:
        HTTPException: 400 if the instructor is invalid or the id is taken.
    """
    return await course_service.create_course(course_data, db)


@router.put(
    "/{course_id}",
    response_model=CourseResponse,
    summary="Update a course",
)
async def update_course(
    course_id: str,
    course_update: CourseUpdate,
    db: DbSession,
) -> Course:
    """
    Update a course. A provided module list replaces the stored one.

    Raises:
        HTTPException: 404 if the course does not exist.
    """
    return await course_service.update_course(course_id, course_update, db)


@router.delete(
    "/{course_id}",
    response_model=DeleteResponse,
    summary="Delete a course",
)
async def delete_course(
    course_id: str,
    db: DbSession,
) -> DeleteResponse:
    """
    Delete a course. Deleting a missing course also succeeds.
    """
    await course_service.delete_course(course_id, db)
    return DeleteResponse(success=True)
