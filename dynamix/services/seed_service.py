"""
Seed Service

Demo users and courses inserted into an empty database at startup when
SEED_DEMO_DATA is enabled.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dynamix.models.course import Course
from dynamix.models.enums import UserRole
from dynamix.models.user import User
from dynamix.schemas.course import CourseCreate
from dynamix.services import course_service, user_service


logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

DEMO_USERS = [
    {
        "user_id": "s1",
        "name": "John Student",
        "email": "student@demo.com",
        "role": UserRole.STUDENT,
    },
    {
        "user_id": "t1",
        "name": "Sarah Tech",
        "email": "teacher@demo.com",
        "role": UserRole.TEACHER,
    },
]

DEMO_COURSES = [
    {
        "id": "c1",
        "title": "Modern Web Development",
        "description": "Learn React, TypeScript, and Tailwind CSS to build modern web apps.",
        "instructorId": "t1",
        "instructorName": "Sarah Tech",
        "category": "Development",
        "thumbnailUrl": "https://picsum.photos/seed/webdev/400/250",
        "modules": [
            {
                "id": "m1",
                "title": "Introduction to React",
                "content": "React is a library for building user interfaces...",
                "quiz": [
                    {
                        "question": "What is React mainly used for?",
                        "options": ["Building databases", "Building user interfaces", "Managing server logic", "Editing photos"],
                        "correctAnswerIndex": 1,
                    },
                    {
                        "question": "What are the building blocks of a React application called?",
                        "options": ["Blocks", "Elements", "Components", "Modules"],
                        "correctAnswerIndex": 2,
                    },
                ],
            },
            {
                "id": "m2",
                "title": "State and Props",
                "content": "Understanding how data flows in a React application is crucial...",
                "quiz": [
                    {
                        "question": "Are props mutable?",
                        "options": ["Yes", "No", "Sometimes", "Only in class components"],
                        "correctAnswerIndex": 1,
                    },
                ],
            },
        ],
    },
    {
        "id": "c2",
        "title": "Data Science Fundamentals",
        "description": "An introduction to Python, Pandas, and data visualization techniques.",
        "instructorId": "t1",
        "instructorName": "Sarah Tech",
        "category": "Data Science",
        "thumbnailUrl": "https://picsum.photos/seed/datascience/400/250",
        "modules": [
            {
                "id": "m3",
                "title": "Python Basics",
                "content": "Variables, loops, and functions in Python...",
                "quiz": [
                    {
                        "question": "Who created Python?",
                        "options": ["Elon Musk", "Guido van Rossum", "Mark Zuckerberg", "Bill Gates"],
                        "correctAnswerIndex": 1,
                    },
                ],
            },
        ],
    },
]


async def _count(model, db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def seed_demo_data(db: AsyncSession) -> None:
    """
    Insert demo users and courses into empty tables.

    Each table is seeded only when it has no rows, so restarts are safe.
    A demo course whose instructor is not a teacher in this database is
    skipped with a warning.
    """
    if await _count(User, db) == 0:
        logger.info("Seeding demo users...")
        for demo_user in DEMO_USERS:
            await user_service.create_user(db, password=DEMO_PASSWORD, **demo_user)

    if await _count(Course, db) == 0:
        logger.info("Seeding demo courses...")
        for demo_course in DEMO_COURSES:
            instructor = await user_service.get_user_by_id(demo_course["instructorId"], db)
            if instructor is None or instructor.role != UserRole.TEACHER:
                logger.warning(
                    "Skipping demo course %s: instructor %s is not a teacher",
                    demo_course["id"], demo_course["instructorId"],
                )
                continue
            await course_service.create_course(CourseCreate.model_validate(demo_course), db)
