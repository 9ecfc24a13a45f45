"""
Study Resource Database Models
==============================

SQLAlchemy ORM models for notes, words, sentences, word-sentence pairs
and lessons. Each row
carries the owning user's id in `user_id`.

Version: 0.1.0
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from shared.database.postgres import Base
from shared.models.common import new_id, utcnow


class OwnedRecordMixin:
    """Primary key, owner and audit columns shared by every resource table."""

    id = Column(UUID(as_uuid=True), primary_key=True, default=new_id)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class NoteRecord(OwnedRecordMixin, Base):
    __tablename__ = "notes"
    __table_args__ = (Index("idx_notes_created", "created"),)

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)


class WordRecord(OwnedRecordMixin, Base):
    __tablename__ = "words"

    word = Column(String(255), nullable=False)
    phonics = Column(String(255))
    part_of_speech = Column(String(50))
    meaning = Column(Text, nullable=False)
    image_url = Column(String(500))
    audio_url = Column(String(500))

    __table_args__ = (Index("idx_words_word_lower", func.lower(word)),)


class SentenceRecord(OwnedRecordMixin, Base):
    __tablename__ = "sentences"

    sentence = Column(Text, nullable=False)
    translation = Column(Text, nullable=False)
    audio_url = Column(String(500))


class LessonRecord(OwnedRecordMixin, Base):
    __tablename__ = "lessons"
    __table_args__ = (
        Index("idx_lessons_course", "course"),
        Index("idx_lessons_unit", "unit"),
        Index("idx_lessons_created", "created"),
    )

    course = Column(String(255), nullable=False)
    unit = Column(String(255), nullable=False)
    lesson = Column(String(255), nullable=False)
    description = Column(Text)
    background = Column(String(500))
    # Word-sentence pair ids, ordered as taught
    word_sentences = Column(ARRAY(UUID(as_uuid=True)), nullable=False, default=list)


class WordSentenceRecord(OwnedRecordMixin, Base):
    __tablename__ = "word_sentences"

    word_id = Column(
        UUID(as_uuid=True),
        ForeignKey("words.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sentence_id = Column(
        UUID(as_uuid=True),
        ForeignKey("sentences.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
