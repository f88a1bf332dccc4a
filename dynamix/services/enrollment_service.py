"""
Enrollment Service

Enrollment storage plus the enrollment lifecycle: enrolling a student,
recording module completion with progress recomputation, and quiz grading.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dynamix.core.config import settings
from dynamix.core.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
)
from dynamix.core.locks import KeyedLock
from dynamix.models.enrollment import Enrollment
from dynamix.models.enums import UserRole
from dynamix.models.module_completion import ModuleCompletion
from dynamix.models.user import utcnow
from dynamix.services import course_service, user_service


logger = logging.getLogger(__name__)

# Serializes enroll/complete cycles per (user_id, course_id) within this process
_pair_locks = KeyedLock()

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def compute_progress(completed_count: int, module_count: int) -> Optional[int]:
    """
    Percentage of modules completed, rounded half up and capped at 100.

    Returns None when the course has no modules, meaning "leave the
    stored progress as it is".
    """
    if module_count <= 0:
        return None
    percent = (200 * completed_count + module_count) // (2 * module_count)
    return min(percent, 100)


# ============== Enrollment Storage ==============

async def find_enrollment(
    user_id: str,
    course_id: str,
    db: AsyncSession,
    for_update: bool = False,
) -> Optional[Enrollment]:
    """
    Get the enrollment for a user/course pair with completions loaded.

    Always re-reads from the database so completions written by bulk
    inserts are visible.

    Args:
        user_id: Student ID.
        course_id: Course ID.
        db: Database session.
        for_update: Lock the row until the transaction ends.

    Returns:
        Enrollment or None.
    """
    query = (
        select(Enrollment)
        .where(
            Enrollment.user_id == user_id,
            Enrollment.course_id == course_id,
        )
        .options(selectinload(Enrollment.completions))
        .execution_options(populate_existing=True)
    )
    if for_update:
        query = query.with_for_update()

    result = await db.execute(query)
    return result.scalar_one_or_none()


async def list_enrollments_by_user(
    user_id: str,
    db: AsyncSession,
) -> List[Enrollment]:
    """
    Get all enrollments for a user, oldest first.
    """
    result = await db.execute(
        select(Enrollment)
        .where(Enrollment.user_id == user_id)
        .options(selectinload(Enrollment.completions))
        .order_by(Enrollment.id.asc())
    )
    return list(result.scalars().all())


async def create_enrollment(
    user_id: str,
    course_id: str,
    db: AsyncSession,
) -> Enrollment:
    """
    Insert a fresh enrollment with zero progress.

    Raises:
        ConflictError: If the pair is already enrolled.
    """
    if await find_enrollment(user_id, course_id, db):
        raise ConflictError("Already enrolled in this course")

    db.add(
        Enrollment(
            user_id=user_id,
            course_id=course_id,
            progress=0,
        )
    )

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Already enrolled in this course") from exc

    return await find_enrollment(user_id, course_id, db)


async def save_enrollment(
    enrollment: Enrollment,
    db: AsyncSession,
) -> Enrollment:
    """Commit pending changes to an enrollment and return it reloaded."""
    user_id, course_id = enrollment.user_id, enrollment.course_id
    await db.commit()
    return await find_enrollment(user_id, course_id, db)


async def add_completion(
    enrollment_id: int,
    module_id: str,
    db: AsyncSession,
) -> bool:
    """
    Add a module to an enrollment's completed set if it is not there yet.

    Uses INSERT ... ON CONFLICT DO NOTHING on the (enrollment_id,
    module_id) key where the dialect supports it.

    Returns:
        True if a row was inserted, False if it already existed.
    """
    values = {
        "enrollment_id": enrollment_id,
        "module_id": module_id,
        "completed_at": utcnow(),
    }

    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is None:
        try:
            async with db.begin_nested():
                db.add(ModuleCompletion(**values))
        except IntegrityError:
            return False
        return True

    result = await db.execute(
        insert(ModuleCompletion)
        .values(**values)
        .on_conflict_do_nothing(index_elements=["enrollment_id", "module_id"])
    )
    return result.rowcount > 0


async def count_completions(
    enrollment_id: int,
    db: AsyncSession,
) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(ModuleCompletion)
        .where(ModuleCompletion.enrollment_id == enrollment_id)
    )
    return result.scalar_one()


# ============== Lifecycle ==============

async def enroll(
    user_id: str,
    course_id: str,
    db: AsyncSession,
) -> Tuple[Enrollment, bool]:
    """
    Enroll a student in a course.

    Idempotent: an existing enrollment for the pair is returned unchanged.

    **Flow:**
    1. Return the existing enrollment if there is one
    2. Check the user exists and is a student
    3. Check the course exists
    4. Create the enrollment with zero progress

    Args:
        user_id: Student ID.
        course_id: Course ID.
        db: Database session.

    Returns:
        Tuple of (enrollment, created).

    Raises:
        NotFoundError: If the user or course does not exist.
        BadRequestError: If the user is not a student.
    """
    async with _pair_locks.hold((user_id, course_id)):
        existing = await find_enrollment(user_id, course_id, db)
        if existing:
            return existing, False

        user = await user_service.get_user_by_id(user_id, db)
        if not user:
            raise NotFoundError("User not found")
        if user.role != UserRole.STUDENT:
            raise BadRequestError("Only students can enroll in courses")

        if not await course_service.get_course(course_id, db):
            raise NotFoundError("Course not found")

        try:
            enrollment = await create_enrollment(user_id, course_id, db)
        except ConflictError:
            # Another worker process created it first
            existing = await find_enrollment(user_id, course_id, db)
            if existing is None:
                raise
            return existing, False

        logger.info("Enrolled user %s in course %s", user_id, course_id)
        return enrollment, True


async def complete_module(
    user_id: str,
    course_id: str,
    module_id: str,
    db: AsyncSession,
) -> Enrollment:
    """
    Mark a module complete and recompute progress.

    Completing an already-completed module is a no-op. Progress is
    recomputed from the full completed set; it keeps its previous value
    when the course no longer exists or has no modules.

    Args:
        user_id: Student ID.
        course_id: Course ID.
        module_id: Module being completed.
        db: Database session.

    Returns:
        Updated Enrollment.

    Raises:
        NotFoundError: If the user is not enrolled in the course.
    """
    async with _pair_locks.hold((user_id, course_id)):
        enrollment = await find_enrollment(user_id, course_id, db, for_update=True)
        if not enrollment:
            raise NotFoundError("Enrollment not found")

        if module_id in enrollment.completed_module_ids:
            await db.commit()
            return enrollment

        if await add_completion(enrollment.id, module_id, db):
            completed_count = await count_completions(enrollment.id, db)
            course = await course_service.get_course(course_id, db)

            if course is None:
                logger.warning(
                    "Course %s missing while recording module %s; progress kept at %d",
                    course_id, module_id, enrollment.progress,
                )
            else:
                progress = compute_progress(completed_count, course.module_count)
                if progress is not None:
                    enrollment.progress = progress

            enrollment.last_active_at = utcnow()
            logger.info(
                "User %s completed module %s of course %s (%d%%)",
                user_id, module_id, course_id, enrollment.progress,
            )

        return await save_enrollment(enrollment, db)


def grade_quiz(
    questions: Sequence[dict],
    answers: Sequence[Optional[int]],
) -> Tuple[int, int]:
    """
    Count correct answers.

    Returns:
        Tuple of (correct_count, score_percent).
    """
    correct_count = 0
    for idx, question in enumerate(questions):
        if idx < len(answers) and answers[idx] == question.get("correct_answer_index"):
            correct_count += 1

    score = int((correct_count / len(questions)) * 100)
    return correct_count, score


async def submit_quiz(
    user_id: str,
    course_id: str,
    module_id: str,
    answers: Sequence[Optional[int]],
    db: AsyncSession,
) -> dict:
    """
    Grade a module quiz; a passing score completes the module.

    **Grading:**
    - ``answers[i]`` is compared with question ``i``'s correctAnswerIndex
    - Score >= QUIZ_PASS_THRESHOLD percent = passed

    Returns:
        Dict shaped like QuizResult.

    Raises:
        NotFoundError: If the enrollment, course or module does not exist.
        BadRequestError: If the module has no quiz.
    """
    enrollment = await find_enrollment(user_id, course_id, db)
    if not enrollment:
        raise NotFoundError("Enrollment not found")

    course = await course_service.get_course(course_id, db)
    if not course:
        raise NotFoundError("Course not found")

    module = course.find_module(module_id)
    if module is None:
        raise NotFoundError("Module not found")

    questions = module.get("quiz") or []
    if not questions:
        raise BadRequestError("This module does not have a quiz")

    correct_count, score = grade_quiz(questions, answers)
    passed = score >= settings.QUIZ_PASS_THRESHOLD

    if passed:
        enrollment = await complete_module(user_id, course_id, module_id, db)

    return {
        "module_id": module_id,
        "score": score,
        "passed": passed,
        "correct_count": correct_count,
        "total_questions": len(questions),
        "message": (
            "Quiz passed! Great job!"
            if passed
            else f"Quiz not passed. You need {settings.QUIZ_PASS_THRESHOLD}% to pass."
        ),
        "enrollment": enrollment,
    }
