"""
PostgreSQL Access
=================

One async engine per process, built lazily from `PostgresSettings`, and a
commit-or-rollback session scope for request handlers and scripts.

Version: 0.1.0
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shared.config import PostgresSettings, settings
from shared.logging import get_logger


logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for coaching tables."""


class Database:
    """Engine plus session factory for one PostgreSQL database."""

    def __init__(self, config: PostgresSettings, echo: bool = False) -> None:
        self.config = config
        self.engine: AsyncEngine = create_async_engine(
            config.async_url,
            echo=echo,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_pre_ping=True,
        )
        self.sessions = async_sessionmaker(self.engine, expire_on_commit=False)
        logger.info("postgres_engine_created", host=config.host, database=config.db)

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("postgres_tables_created", tables=sorted(Base.metadata.tables))

    async def server_version(self) -> str:
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT version()"))
            return result.scalar() or ""

    async def health_check(self) -> dict[str, Any]:
        """Round-trip `SELECT 1` and report latency."""
        start = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("postgres_health_check_failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}
        latency_ms = (time.perf_counter() - start) * 1000
        return {"status": "healthy", "latency_ms": round(latency_ms, 2)}


@lru_cache
def get_database() -> Database:
    """Process-wide database, created on first use."""
    return Database(settings.postgres, echo=settings.debug and settings.is_development)


async def close_database() -> None:
    """Dispose the engine if one was created."""
    if get_database.cache_info().currsize == 0:
        return
    await get_database().engine.dispose()
    get_database.cache_clear()
    logger.info("postgres_engine_closed")


@asynccontextmanager
async def postgres_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session that commits on clean exit and rolls back on any exception.

    Usage:
        async with postgres_session() as session:
            repos = sql_repositories(session)
    """
    async with get_database().sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
