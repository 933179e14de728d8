"""
Word Store

Persistence adapter for cached dictionary entries. Owns every physical
read and write of the words collection; callers never touch sessions.

Usage:
    from services.dictionary.store import WordStore

    store = WordStore(SessionLocal)
    record = await store.get_word("Serendipity")  # looked up as "serendipity"
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.models import WordDocument
from core.schemas import WordDefinition
from utils.exceptions import PersistenceError
from utils.logging import get_logger
from utils.sanitize import normalize_word

logger = get_logger(__name__)


class WordStore:
    """
    Async adapter over the words collection.

    When no session factory is configured the store is disabled: reads
    miss and writes return None without touching anything.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self._session_factory = session_factory

    @property
    def enabled(self) -> bool:
        return self._session_factory is not None

    async def get_word(self, word: str) -> Optional[WordDocument]:
        """
        Find the stored record for a word.

        Args:
            word: Any casing; looked up lower-cased

        Returns:
            WordDocument or None. With duplicates, the oldest record wins.

        Raises:
            PersistenceError: If the backend read fails
        """
        key = normalize_word(word)
        if not self.enabled or not key:
            return None

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(WordDocument)
                    .where(WordDocument.word == key)
                    .order_by(WordDocument.created_at.asc())
                    .limit(1)
                )
                return result.scalars().first()
        except Exception as e:
            raise PersistenceError(
                f"Error fetching word from database: {e}",
                operation="get_word",
                details={"word": key}
            ) from e

    async def save_word(
        self,
        definition: WordDefinition,
        key: Optional[str] = None
    ) -> Optional[WordDocument]:
        """
        Insert a new record for a generated definition.

        The record is keyed by `key` (the word that was searched) when given,
        otherwise by the word the vendor echoed back.

        No existence check is made here; the resolver's check-then-create
        sequence is not atomic and may produce duplicates.

        Raises:
            PersistenceError: If the backend write fails
        """
        if not self.enabled:
            return None

        document = WordDocument(
            word=normalize_word(key or definition.word),
            starting=definition.starting,
            phonetic=definition.phonetic,
            definition=definition.definition,
            examples=list(definition.examples),
            synonyms=list(definition.synonyms),
            usage=definition.usage,
        )

        try:
            async with self._session_factory() as session:
                session.add(document)
                await session.commit()
                await session.refresh(document)
        except Exception as e:
            raise PersistenceError(
                f"Error saving word to database: {e}",
                operation="save_word",
                details={"word": document.word}
            ) from e

        logger.info(f"Saved word: '{document.word}' ({document.id})")
        return document

    async def set_pronunciation(self, record_id: str, file_id: str) -> bool:
        """
        Attach a stored audio file to a word record.

        Returns:
            bool: True if a record was updated

        Raises:
            PersistenceError: If the backend write fails
        """
        if not self.enabled:
            return False

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    update(WordDocument)
                    .where(WordDocument.id == record_id)
                    .values(pronunciation_id=file_id)
                )
                await session.commit()
        except Exception as e:
            raise PersistenceError(
                f"Error updating word pronunciation: {e}",
                operation="set_pronunciation",
                details={"record_id": record_id}
            ) from e

        updated = (result.rowcount or 0) > 0
        if updated:
            logger.debug(f"Linked pronunciation {file_id} to word {record_id}")
        return updated

    async def count_words(self, word: str) -> int:
        """Number of records stored for a word (duplicates included)."""
        key = normalize_word(word)
        if not self.enabled or not key:
            return 0

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(func.count()).select_from(WordDocument).where(WordDocument.word == key)
                )
                return int(result.scalar_one())
        except Exception as e:
            raise PersistenceError(
                f"Error counting words: {e}",
                operation="count_words",
                details={"word": key}
            ) from e
