"""
Shared Models
=============

Pydantic models shared across services.

Models:
- User models (User, UserInfo, Role, UserStatus)
- Study resources (Note, Word, Sentence, WordSentence, Lesson and their request models)
- Auth requests and responses (RegisterRequest, LoginRequest, AuthResponse)
- Common responses (ErrorResponse, HealthResponse)
"""

from shared.models.auth import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RefreshTokenResponse,
    RegisterRequest,
)
from shared.models.common import (
    ErrorResponse,
    HealthResponse,
    new_id,
    utcnow,
)
from shared.models.resources import (
    Lesson,
    LessonCreate,
    LessonUpdate,
    Note,
    NoteCreate,
    NoteUpdate,
    OwnedModel,
    Sentence,
    SentenceCreate,
    SentenceUpdate,
    Word,
    WordCreate,
    WordSentence,
    WordSentenceCreate,
    WordSentenceUpdate,
    WordUpdate,
)
from shared.models.user import Role, User, UserInfo, UserStatus

__all__ = [
    # Auth
    "AuthResponse",
    "LoginRequest",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
    "RegisterRequest",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "new_id",
    "utcnow",
    # Users
    "Role",
    "User",
    "UserInfo",
    "UserStatus",
    # Resources
    "OwnedModel",
    "Note",
    "NoteCreate",
    "NoteUpdate",
    "Word",
    "WordCreate",
    "WordUpdate",
    "WordSentence",
    "WordSentenceCreate",
    "WordSentenceUpdate",
    "Sentence",
    "SentenceCreate",
    "SentenceUpdate",
    "Lesson",
    "LessonCreate",
    "LessonUpdate",
]
