"""
Coaching Repositories
=====================

Storage access for users and study resources, bundled per request.

Usage:
    async with postgres_session() as session:
        repos = sql_repositories(session)
        notes = await repos.notes.list(owner_id=user.id)
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from services.coaching.models import (
    LessonRecord,
    NoteRecord,
    SentenceRecord,
    UserRecord,
    WordRecord,
    WordSentenceRecord,
)
from services.coaching.repositories.base import Repository, UserRepository
from services.coaching.repositories.memory import (
    InMemoryRepository,
    InMemoryUserRepository,
    MemoryStore,
)
from services.coaching.repositories.sql import SqlRepository, SqlUserRepository
from shared.models import Lesson, Note, Sentence, User, Word, WordSentence


USER_UNIQUE_FIELDS = ("username", "email")


@dataclass(frozen=True)
class Repositories:
    """Repositories sharing one unit of work."""

    users: UserRepository
    notes: Repository[Note]
    words: Repository[Word]
    sentences: Repository[Sentence]
    word_sentences: Repository[WordSentence]
    lessons: Repository[Lesson]


def sql_repositories(session: AsyncSession) -> Repositories:
    """Repositories backed by PostgreSQL through `session`."""
    return Repositories(
        users=SqlUserRepository(
            session, UserRecord, User,
            owner_column="id", unique_fields=USER_UNIQUE_FIELDS, entity="User",
        ),
        notes=SqlRepository(session, NoteRecord, Note, entity="Note"),
        words=SqlRepository(session, WordRecord, Word, entity="Word"),
        sentences=SqlRepository(session, SentenceRecord, Sentence, entity="Sentence"),
        word_sentences=SqlRepository(
            session, WordSentenceRecord, WordSentence, entity="Word sentence",
        ),
        lessons=SqlRepository(session, LessonRecord, Lesson, entity="Lesson"),
    )


def memory_repositories(store: MemoryStore) -> Repositories:
    """Repositories backed by a process-local `MemoryStore`."""
    return Repositories(
        users=InMemoryUserRepository(
            store, "users",
            owner_field="id", unique_fields=USER_UNIQUE_FIELDS, entity="User",
        ),
        notes=InMemoryRepository(store, "notes", entity="Note"),
        words=InMemoryRepository(store, "words", entity="Word"),
        sentences=InMemoryRepository(store, "sentences", entity="Sentence"),
        word_sentences=InMemoryRepository(store, "word_sentences", entity="Word sentence"),
        lessons=InMemoryRepository(store, "lessons", entity="Lesson"),
    )


__all__ = [
    "Repositories",
    "Repository",
    "UserRepository",
    "SqlRepository",
    "SqlUserRepository",
    "InMemoryRepository",
    "InMemoryUserRepository",
    "MemoryStore",
    "sql_repositories",
    "memory_repositories",
]
