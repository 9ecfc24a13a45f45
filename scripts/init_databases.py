#!/usr/bin/env python3
"""
Database Initialization Script
==============================

Create the English Coaching tables and seed the bootstrap Admin account.

Usage:
    python scripts/init_databases.py
    python scripts/init_databases.py --skip-admin

The admin account is read from ADMIN_EMAIL / ADMIN_PASSWORD and skipped
when either is unset.

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.logging import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False, service_name="init-db")
logger = get_logger(__name__)


async def init_postgres() -> bool:
    """Create every table the coaching service uses."""
    import services.coaching.models  # noqa: F401  registers tables on Base.metadata
    from shared.database.postgres import get_database

    logger.info("postgres_init_starting")

    try:
        database = get_database()
        await database.create_all()
        version = await database.server_version()
        logger.info("postgres_initialized", version=version[:50])
        return True

    except Exception as e:
        logger.error("postgres_init_failed", error=str(e))
        return False


async def seed_admin() -> bool:
    """Seed the bootstrap Admin from settings."""
    from services.coaching.repositories import sql_repositories
    from services.coaching.services.admin import ensure_admin
    from shared.auth.dependencies import get_password_hasher
    from shared.config import settings
    from shared.database.postgres import postgres_session
    from shared.errors import AppError

    admin_settings = settings.admin
    if not admin_settings.email or admin_settings.password is None:
        logger.info("admin_seed_skipped", reason="ADMIN_EMAIL or ADMIN_PASSWORD unset")
        return True

    try:
        async with postgres_session() as session:
            repos = sql_repositories(session)
            admin, created = await ensure_admin(
                repos.users,
                get_password_hasher(),
                email=admin_settings.email,
                password=admin_settings.password.get_secret_value(),
                display_name=admin_settings.display_name,
                min_password_length=settings.password.min_length,
            )
        logger.info("admin_seeded", user_id=str(admin.id), created=created)
        return True

    except AppError as e:
        logger.error("admin_seed_failed", error=e.message, error_code=e.kind.value)
        return False


async def main(args: argparse.Namespace) -> int:
    """Main initialization function."""
    from shared.database.postgres import close_database

    logger.info("database_init_starting")

    results = {"PostgreSQL": await init_postgres()}
    if results["PostgreSQL"] and not args.skip_admin:
        results["Admin"] = await seed_admin()

    await close_database()

    failed = [name for name, success in results.items() if not success]
    for name, success in results.items():
        logger.info("database_init_step", step=name, ok=success)

    if failed:
        logger.error("database_init_failed", failed=failed)
        return 1

    logger.info("database_init_completed")
    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize English Coaching databases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--skip-admin",
        action="store_true",
        help="Create tables only, without seeding the admin account",
    )
    return parser.parse_args()


if __name__ == "__main__":
    sys.exit(asyncio.run(main(parse_args())))
