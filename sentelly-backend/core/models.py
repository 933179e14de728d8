"""
Database Models Module

Defines SQLAlchemy ORM models for the two document collections.
All models inherit from Base defined in database.py.

Models:
    - WordDocument: Cached dictionary entry, keyed by lower-cased word
    - ActivityDocument: One logged user-facing operation
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text

from config.settings import settings
from .database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_document_id() -> str:
    """Opaque document id, in the style of a document store."""
    return uuid.uuid4().hex


class WordDocument(Base):
    """
    Cached dictionary entry.

    `word` is indexed but not unique: two simultaneous first
    lookups of the same unseen word may both insert a row. Readers take
    the oldest match.

    Attributes:
        id: Opaque document id
        word: Lower-cased headword
        starting: Leading determiner ("A", "An", "The")
        phonetic: Phonetic transcription
        definition: One-sentence definition
        examples: Ordered example sentences
        synonyms: Ordered synonyms
        usage: Usage notes
        pronunciation_id: Object-storage id of generated audio
        created_at / updated_at: Assigned on write
    """

    __tablename__ = settings.WORDS_COLLECTION

    id = Column(String(64), primary_key=True, default=new_document_id)
    word = Column(String(255), nullable=False, index=True)
    starting = Column(String(16), nullable=True)
    phonetic = Column(String(255), nullable=True)
    definition = Column(Text, nullable=False)
    examples = Column(JSON, nullable=False, default=list)
    synonyms = Column(JSON, nullable=False, default=list)
    usage = Column(Text, nullable=True)
    pronunciation_id = Column(String(64), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<WordDocument(id={self.id}, word='{self.word}')>"


class ActivityDocument(Base):
    """
    Write-mostly activity log entry, read only for dashboard aggregates.

    Attributes:
        activity_type: word_search, audio_generation, ...
        word_searched: Lower-cased word, if any
        response_source: database, gemini, cache or error
        tokens_used: Approximate Gemini token usage
        response_time: Wall-clock latency in milliseconds
        success: Whether the operation succeeded
        error_message: Internal error message on failure
        user_id / user_email: Optional caller identity
        user_agent / ip_address / session_id: Request context
        metadata_: Free-form map (stored in the "metadata" column)
    """

    __tablename__ = settings.ACTIVITY_COLLECTION

    id = Column(String(64), primary_key=True, default=new_document_id)

    user_id = Column(String(255), nullable=True, index=True)
    user_email = Column(String(255), nullable=True)

    activity_type = Column(String(64), nullable=False, index=True)
    word_searched = Column(String(255), nullable=True)
    response_source = Column(String(32), nullable=False)
    tokens_used = Column(Integer, nullable=True)
    response_time = Column(Integer, nullable=False, default=0)
    success = Column(Boolean, nullable=False, default=True)
    error_message = Column(Text, nullable=True)

    user_agent = Column(String(512), nullable=True)
    ip_address = Column(String(64), nullable=True)
    session_id = Column(String(128), nullable=True)
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), default=utc_now, index=True)

    def __repr__(self) -> str:
        return (
            f"<ActivityDocument(id={self.id}, type='{self.activity_type}', "
            f"source='{self.response_source}', success={self.success})>"
        )
