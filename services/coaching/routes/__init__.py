"""
Coaching Routes
===============

API route handlers for the English Coaching service.
"""

from services.coaching.routes import admin, auth, resources


__all__ = ["admin", "auth", "resources"]
