"""Database connection management using async SQLAlchemy."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.core.settings import get_settings

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Global engine and session factory
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    engine_args: dict = {"echo": echo, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        engine_args.update(pool_size=5, max_overflow=10)
    return create_async_engine(database_url, **engine_args)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables known to the ORM metadata."""
    # Registers every model on Base.metadata
    from event_booking_ms.shared.infrastructure.database import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db() -> None:
    """Initialize database connection."""
    global _engine, _async_session_factory

    settings = get_settings()

    _engine = build_engine(settings.database_url, echo=settings.debug)
    _async_session_factory = build_session_factory(_engine)

    if settings.db_create_all:
        await create_schema(_engine)

    logger.info(
        "Database connection initialized: %s", settings.database_url.split("@")[-1]
    )


async def close_db() -> None:
    """Close database connection."""
    global _engine, _async_session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database connection closed")


async def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for components that manage their own sessions."""
    if _async_session_factory is None:
        await init_db()
    assert _async_session_factory is not None
    return _async_session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session.

    Use cases open their own transaction on this session with
    ``session.begin()``; the final commit here only flushes plain reads.
    """
    session_factory = await get_session_factory()

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
