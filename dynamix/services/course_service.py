"""
Course Service

Course catalog reads and course authoring writes. Holds no enrollment
logic; the enrollment service reads courses through get_course.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dynamix.core.exceptions import BadRequestError, ConflictError, NotFoundError
from dynamix.core.ids import COURSE_PREFIX, MODULE_PREFIX, new_id
from dynamix.models.course import Course
from dynamix.models.enums import UserRole
from dynamix.schemas.course import CourseCreate, CourseUpdate, ModuleSchema
from dynamix.services import user_service


logger = logging.getLogger(__name__)


def serialize_modules(modules: List[ModuleSchema]) -> List[Dict[str, Any]]:
    """
    Turn validated module schemas into the stored JSON document.

    Modules without an id get a generated one.
    """
    documents = []
    for module in modules:
        document = module.model_dump(mode="json")
        if not document.get("id"):
            document["id"] = new_id(MODULE_PREFIX)
        documents.append(document)
    return documents


# ============== Catalog Reads ==============

async def get_course(
    course_id: str,
    db: AsyncSession,
) -> Optional[Course]:
    """
    Get a course by ID.

    Returns:
        Course or None if not found.
    """
    result = await db.execute(
        select(Course).where(Course.id == course_id)
    )
    return result.scalar_one_or_none()


async def get_course_or_404(
    course_id: str,
    db: AsyncSession,
) -> Course:
    """
    Get a course by ID.

    Raises:
        NotFoundError: If the course does not exist.
    """
    course = await get_course(course_id, db)
    if not course:
        raise NotFoundError("Course not found")
    return course


async def list_courses(
    db: AsyncSession,
    instructor_id: Optional[str] = None,
) -> List[Course]:
    """
    List all courses in insertion order.

    Args:
        db: Database session.
        instructor_id: Optional filter on the owning teacher.

    Returns:
        List of courses, oldest first.
    """
    query = select(Course)
    if instructor_id:
        query = query.where(Course.instructor_id == instructor_id)

    result = await db.execute(
        query.order_by(Course.created_at.asc(), Course.id.asc())
    )
    return list(result.scalars().all())


# ============== Authoring Writes ==============

async def create_course(
    course_data: CourseCreate,
    db: AsyncSession,
) -> Course:
    """
    Create a course with its full module and quiz structure.

    **Flow:**
    1. Check the instructor exists and is a teacher
    2. Copy the instructor's name unless the caller supplied one
    3. Generate ids for the course and any module without one
    4. Persist the course and its modules in one write

    Args:
        course_data: Course fields and modules.
        db: Database session.

    Returns:
        The created Course.

    Raises:
        BadRequestError: If the instructor is unknown or not a teacher.
        ConflictError: If a caller-supplied id is already taken.
    """
    instructor = await user_service.get_user_by_id(course_data.instructor_id, db)
    if not instructor or instructor.role != UserRole.TEACHER:
        raise BadRequestError("Instructor must be an existing teacher")

    if course_data.id and await get_course(course_data.id, db):
        raise ConflictError(f"Course with ID '{course_data.id}' already exists")

    course = Course(
        id=course_data.id or new_id(COURSE_PREFIX),
        title=course_data.title,
        description=course_data.description,
        instructor_id=instructor.id,
        instructor_name=course_data.instructor_name or instructor.name,
        category=course_data.category,
        thumbnail_url=course_data.thumbnail_url,
        modules=serialize_modules(course_data.modules),
    )
    db.add(course)

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(f"Course with ID '{course.id}' already exists") from exc

    await db.refresh(course)
    logger.info("Created course %s with %d modules", course.id, course.module_count)
    return course


async def update_course(
    course_id: str,
    course_update: CourseUpdate,
    db: AsyncSession,
) -> Course:
    """
    Update a course. Only fields present in the request are applied;
    a provided module list replaces the stored one entirely.

    Raises:
        NotFoundError: If the course does not exist.
    """
    course = await get_course_or_404(course_id, db)

    changes = course_update.model_dump(exclude_unset=True, exclude={"modules"})
    for field, value in changes.items():
        if field == "title" and value is None:
            continue
        setattr(course, field, value)

    if course_update.modules is not None:
        course.modules = serialize_modules(course_update.modules)

    await db.commit()
    await db.refresh(course)
    return course


async def delete_course(
    course_id: str,
    db: AsyncSession,
) -> None:
    """
    Delete a course if it exists.

    Idempotent. Enrollments referencing the course are left in place.
    """
    course = await get_course(course_id, db)
    if course is None:
        return

    await db.delete(course)
    await db.commit()
    logger.info("Deleted course %s", course_id)
