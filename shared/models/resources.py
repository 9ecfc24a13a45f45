"""
Study Resource Models
=====================

Notes, words, sentences, word-sentence pairs and lessons. Every resource belongs to exactly one
user and exposes `owner_id()` so it satisfies the `OwnedResource` protocol
used by the authorization checks.

Version: 0.1.0
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shared.models.common import new_id, utcnow


class OwnedModel(BaseModel):
    """Fields shared by every owned resource."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=new_id)
    user_id: UUID
    created: datetime = Field(default_factory=utcnow)
    updated: datetime = Field(default_factory=utcnow)

    def owner_id(self) -> UUID:
        return self.user_id


# =============================================================================
# Notes
# =============================================================================


class NoteCreate(BaseModel):
    """Request model for creating a note."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class NoteUpdate(BaseModel):
    """Request model for updating a note."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)


class Note(OwnedModel):
    title: str
    content: str


# =============================================================================
# Words
# =============================================================================


class WordCreate(BaseModel):
    """Request model for creating a vocabulary word."""

    word: str = Field(..., min_length=1, max_length=255)
    meaning: str = Field(..., min_length=1)
    phonics: str | None = Field(default=None, max_length=255)
    part_of_speech: str | None = Field(default=None, max_length=50)
    image_url: str | None = Field(default=None, max_length=500)
    audio_url: str | None = Field(default=None, max_length=500)


class WordUpdate(BaseModel):
    """Request model for updating a vocabulary word."""

    word: str | None = Field(default=None, min_length=1, max_length=255)
    meaning: str | None = Field(default=None, min_length=1)
    phonics: str | None = Field(default=None, max_length=255)
    part_of_speech: str | None = Field(default=None, max_length=50)
    image_url: str | None = Field(default=None, max_length=500)
    audio_url: str | None = Field(default=None, max_length=500)


class Word(OwnedModel):
    word: str
    meaning: str
    phonics: str | None = None
    part_of_speech: str | None = None
    image_url: str | None = None
    audio_url: str | None = None


# =============================================================================
# Sentences
# =============================================================================


class SentenceCreate(BaseModel):
    """Request model for creating an example sentence."""

    sentence: str = Field(..., min_length=1)
    translation: str = Field(..., min_length=1)
    audio_url: str | None = Field(default=None, max_length=500)


class SentenceUpdate(BaseModel):
    """Request model for updating an example sentence."""

    sentence: str | None = Field(default=None, min_length=1)
    translation: str | None = Field(default=None, min_length=1)
    audio_url: str | None = Field(default=None, max_length=500)


class Sentence(OwnedModel):
    sentence: str
    translation: str
    audio_url: str | None = None


# =============================================================================
# Word-sentence pairs
# =============================================================================


class WordSentenceCreate(BaseModel):
    """Request model for pairing a word with an example sentence."""

    word_id: UUID
    sentence_id: UUID


class WordSentenceUpdate(BaseModel):
    word_id: UUID | None = None
    sentence_id: UUID | None = None


class WordSentence(OwnedModel):
    """A word taught through one example sentence. Lessons list these by id."""

    word_id: UUID
    sentence_id: UUID


# =============================================================================
# Lessons
# =============================================================================


class LessonCreate(BaseModel):
    """Request model for creating a lesson."""

    course: str = Field(..., min_length=1, max_length=255)
    unit: str = Field(..., min_length=1, max_length=255)
    lesson: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    background: str | None = Field(default=None, max_length=500)
    word_sentences: list[UUID] = Field(default_factory=list)


class LessonUpdate(BaseModel):
    """Request model for updating a lesson."""

    course: str | None = Field(default=None, min_length=1, max_length=255)
    unit: str | None = Field(default=None, min_length=1, max_length=255)
    lesson: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    background: str | None = Field(default=None, max_length=500)
    word_sentences: list[UUID] | None = None


class Lesson(OwnedModel):
    course: str
    unit: str
    lesson: str
    description: str | None = None
    background: str | None = None
    word_sentences: list[UUID] = Field(default_factory=list)
