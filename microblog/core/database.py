"""Microblog Database Configuration - Async SQLAlchemy.

The engine and session factory are built by the application lifespan and
kept on app.state; there is no module-level engine.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from microblog.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Pooled async engine for the configured PostgreSQL database."""
    return create_async_engine(
        settings.effective_database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
        echo=settings.debug and settings.log_level == "DEBUG",
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Stores return ORM objects after commit, so keep their attributes loaded
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; committed on success, rolled back otherwise."""
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            # Includes CancelledError when the client disconnects mid-request
            await session.rollback()
            raise


async def check_db_connection(session_maker: async_sessionmaker[AsyncSession] | None) -> bool:
    """Probe the database with SELECT 1. Never raises."""
    if session_maker is None:
        return False
    try:
        async with session_maker() as session:
            await session.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        logger.warning(f"Database health probe failed: {e}")
        return False
    return True
