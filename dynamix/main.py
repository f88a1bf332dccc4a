"""
Dynamix LMS Backend - FastAPI Application

Main entry point for the application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dynamix import __version__
from dynamix.api import router as api_router
from dynamix.core.config import settings
from dynamix.core.database import close_db, get_session_maker, init_db
from dynamix.core.logging_config import configure_logging
from dynamix.services.seed_service import seed_demo_data


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting Dynamix LMS backend (%s)", settings.ENVIRONMENT)

    if settings.AUTO_CREATE_TABLES:
        await init_db()

    if settings.SEED_DEMO_DATA:
        async with get_session_maker()() as session:
            await seed_demo_data(session)

    yield
    # Shutdown
    logger.info("Shutting down Dynamix LMS backend")
    await close_db()


# Create FastAPI application
app = FastAPI(
    title="Dynamix LMS",
    description="Learning management backend with courses, modules, quizzes and enrollment progress.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Health status and environment info.
    """
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": __version__,
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links.
    """
    return {
        "message": "Welcome to the Dynamix LMS API",
        "docs": "/docs",
        "health": "/health",
    }
