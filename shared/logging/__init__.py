"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from shared.logging import get_logger, setup_logging

    # Setup at application start
    setup_logging()

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("login_succeeded", user_id="0190...")
"""

from shared.logging.logger import (
    censor_secrets,
    get_logger,
    setup_logging,
)


__all__ = [
    "censor_secrets",
    "get_logger",
    "setup_logging",
]
