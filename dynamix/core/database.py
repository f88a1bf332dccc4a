"""
Database Configuration

Async SQLAlchemy 2.0 setup. PostgreSQL via asyncpg in production,
any async driver URL is accepted (tests run on aiosqlite).
"""

from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models should inherit from this class.
    """
    pass


# Module-level engine instance (lazily initialized)
_engine: Optional[AsyncEngine] = None
_async_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def engine_options(db_url: str, use_ssl: bool = False) -> Dict[str, Any]:
    """
    Build create_async_engine keyword arguments for a database URL.

    SQLite URLs get no pool sizing; asyncpg URLs optionally get an
    SSL context for hosted Postgres.
    """
    if db_url.startswith("sqlite"):
        return {}

    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    }
    if use_ssl and db_url.startswith("postgresql+asyncpg"):
        import ssl

        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        options["connect_args"] = {"ssl": ssl_context}
    return options


def normalize_database_url(db_url: str) -> str:
    """Strip query parameters asyncpg does not accept (sslmode, channel_binding)."""
    if db_url.startswith("postgresql+asyncpg") and "?" in db_url:
        return db_url.split("?")[0]
    return db_url


def get_engine() -> AsyncEngine:
    """
    Get or create the async engine.

    Lazy initialization to avoid import-time database connection issues.
    """
    global _engine
    if _engine is None:
        from dynamix.core.config import settings

        db_url = normalize_database_url(settings.DATABASE_URL)
        _engine = create_async_engine(
            db_url,
            echo=settings.is_development and settings.LOG_LEVEL == "DEBUG",
            **engine_options(db_url, settings.DATABASE_SSL),
        )
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get or create the session maker."""
    global _async_session_maker
    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...

    Yields:
        AsyncSession: An async database session.
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Initialize database tables.

    Note: In production, use Alembic migrations instead.
    This is useful for testing or initial development.
    """
    # Register all models on Base.metadata
    import dynamix.models  # noqa: F401

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    global _engine, _async_session_maker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_maker = None
