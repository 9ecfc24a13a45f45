"""
Application Errors
==================

Error taxonomy surfaced at the HTTP boundary. Each error carries a kind
and the status code it renders as; component-local failures (token,
hashing, storage) are translated into one of these before they leave a
service.

Version: 0.1.0
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Client-visible error categories."""

    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class AppError(Exception):
    """Base class for errors rendered to API clients."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Malformed or missing input."""

    kind = ErrorKind.VALIDATION
    status_code = 400


class UnauthorizedError(AppError):
    """Bad credentials or an invalid, expired or orphaned token."""

    kind = ErrorKind.UNAUTHORIZED
    status_code = 401


class ForbiddenError(AppError):
    """Authenticated, but not allowed."""

    kind = ErrorKind.FORBIDDEN
    status_code = 403


class NotFoundError(AppError):
    """Requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation, e.g. duplicate email or username."""

    kind = ErrorKind.CONFLICT
    status_code = 409


class InternalError(AppError):
    """Hashing, signing or storage subsystem failure."""

    kind = ErrorKind.INTERNAL
    status_code = 500


class ConfigurationError(Exception):
    """Raised at startup when configuration cannot produce a working service."""
