"""
Coaching Database Models
========================

SQLAlchemy ORM models. Importing this package registers every table on
`shared.database.Base.metadata`.
"""

from services.coaching.models.resources import (
    LessonRecord,
    NoteRecord,
    SentenceRecord,
    WordRecord,
    WordSentenceRecord,
)
from services.coaching.models.user import UserRecord

__all__ = [
    "UserRecord",
    "NoteRecord",
    "WordRecord",
    "SentenceRecord",
    "WordSentenceRecord",
    "LessonRecord",
]
