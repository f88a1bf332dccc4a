"""
Pytest Configuration and Fixtures

Provides reusable async fixtures for testing the Dynamix LMS backend
against a throwaway SQLite database.
"""

import os

# Settings are read at import time; these must be set before dynamix is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./dynamix-test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["DEFAULT_COURSE_ID"] = ""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


# ==================== Database Fixtures ====================

@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh SQLite file database with every table created."""
    import dynamix.models  # noqa: F401
    from dynamix.core.database import Base

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'lms.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """A session for calling services directly."""
    async with session_maker() as session:
        yield session


# ==================== HTTP Client Fixtures ====================

@pytest_asyncio.fixture
async def app(session_maker):
    """The FastAPI app with get_db bound to the test database."""
    from dynamix.core.database import get_db
    from dynamix.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client talking to the in-process app under /api."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api") as ac:
        yield ac


# ==================== Domain Fixtures ====================

TEACHER_PASSWORD = "teacher-pass"
STUDENT_PASSWORD = "student-pass"


@pytest_asyncio.fixture
async def teacher(db):
    """Teacher ``t1``."""
    from dynamix.models.enums import UserRole
    from dynamix.services import user_service

    return await user_service.create_user(
        db,
        user_id="t1",
        name="Sarah Tech",
        email="teacher@demo.com",
        password=TEACHER_PASSWORD,
        role=UserRole.TEACHER,
    )


@pytest_asyncio.fixture
async def student(db):
    """Student ``s1``."""
    from dynamix.models.enums import UserRole
    from dynamix.services import user_service

    return await user_service.create_user(
        db,
        user_id="s1",
        name="John Student",
        email="student@demo.com",
        password=STUDENT_PASSWORD,
        role=UserRole.STUDENT,
    )


@pytest.fixture
def sample_course_data() -> dict:
    """Course ``c1`` with two quizzed modules, in wire (camelCase) shape."""
    return {
        "id": "c1",
        "title": "Modern Web Development",
        "description": "Learn React, TypeScript, and Tailwind CSS.",
        "instructorId": "t1",
        "category": "Development",
        "modules": [
            {
                "id": "m1",
                "title": "Introduction to React",
                "content": "React is a library for building user interfaces...",
                "quiz": [
                    {
                        "question": "What is React mainly used for?",
                        "options": ["Databases", "User interfaces", "Servers", "Photos"],
                        "correctAnswerIndex": 1,
                    },
                    {
                        "question": "What are React building blocks called?",
                        "options": ["Blocks", "Elements", "Components", "Modules"],
                        "correctAnswerIndex": 2,
                    },
                ],
            },
            {
                "id": "m2",
                "title": "State and Props",
                "content": "How data flows in a React application...",
                "quiz": [
                    {
                        "question": "Are props mutable?",
                        "options": ["Yes", "No"],
                        "correctAnswerIndex": 1,
                    },
                ],
            },
        ],
    }


@pytest_asyncio.fixture
async def course(db, teacher, sample_course_data):
    """Course ``c1`` owned by ``t1``."""
    from dynamix.schemas.course import CourseCreate
    from dynamix.services import course_service

    return await course_service.create_course(
        CourseCreate.model_validate(sample_course_data), db
    )
