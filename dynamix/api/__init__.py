"""
API Router

Aggregates all endpoint routers.
"""

from fastapi import APIRouter

from dynamix.api.endpoints import auth, users, courses, enrollments

router = APIRouter()

# Include authentication routes
router.include_router(auth.router)

# Include user routes
router.include_router(users.router)

# Include course routes
router.include_router(courses.router)

# Include enrollment routes
router.include_router(enrollments.router)
