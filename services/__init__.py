"""
English Coaching Services
=========================

Services:
- coaching: Accounts, authentication and study resources API
"""

__all__ = [
    "coaching",
]
