"""
English Coaching Shared Library
===============================

Common utilities, configuration and abstractions used by the API service.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - auth: Password hashing, JWT tokens, credential resolution, ownership checks
    - database: PostgreSQL client (SQLAlchemy async)
    - models: Shared Pydantic models
    - errors: Error taxonomy rendered at the HTTP boundary

Version: 0.1.0
"""

__version__ = "0.1.0"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
