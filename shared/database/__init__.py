"""
Database Module
===============

Async PostgreSQL access (asyncpg + SQLAlchemy).

Usage:
    from shared.database import postgres_session

    async with postgres_session() as session:
        result = await session.execute(select(UserRecord))
"""

from shared.database.postgres import (
    Base,
    Database,
    close_database,
    get_database,
    postgres_session,
)


__all__ = [
    "Base",
    "Database",
    "close_database",
    "get_database",
    "postgres_session",
]
