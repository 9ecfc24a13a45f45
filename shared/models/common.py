"""
Common Models
=============

Base response models and identifier helpers.

Version: 0.1.0
"""

import os
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(UTC)


def new_id() -> uuid.UUID:
    """
    Generate a time-ordered UUID (version 7).

    The top 48 bits hold the Unix time in milliseconds, so identifiers sort
    by creation time; the remaining bits are random.
    """
    millis = time.time_ns() // 1_000_000
    rand = int.from_bytes(os.urandom(10), "big")
    rand_a = rand >> 68
    rand_b = rand & ((1 << 62) - 1)
    value = (
        (millis & 0xFFFF_FFFF_FFFF) << 80
        | 0x7 << 76
        | rand_a << 64
        | 0b10 << 62
        | rand_b
    )
    return uuid.UUID(int=value)


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    error_code: str | None = None
    details: dict[str, Any] | None = None
    timestamp: datetime = Field(default_factory=utcnow)


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime = Field(default_factory=utcnow)

    # Component health
    components: dict[str, dict[str, Any]] = Field(default_factory=dict)
