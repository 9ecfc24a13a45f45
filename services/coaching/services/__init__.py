"""
Coaching Services
=================

Business logic for the English Coaching API.
"""

from services.coaching.services.admin import ensure_admin
from services.coaching.services.auth import AuthService

__all__ = ["AuthService", "ensure_admin"]
