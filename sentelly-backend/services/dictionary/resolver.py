"""
Word Lookup Resolver

Turns a raw search query into a definition:

    query -> (spelling correction) -> effective key
          -> word store hit?  -> source=database
          -> otherwise Gemini -> validate -> best-effort save -> source=gemini

Exactly one activity event is recorded per call, whatever the outcome.
Every external call is attempted once; there is no retry and no lock
around the check-then-create sequence, so two simultaneous first lookups
of the same word may both generate and both save.

Usage:
    from services.dictionary.resolver import LookupResolver

    resolver = LookupResolver(store, generator, corrector, activity)
    response = await resolver.resolve("recieve", caller=identity)
"""

import time
from typing import Any, Dict, Optional

from config.constants import MAX_WORD_LENGTH
from core.models import WordDocument
from core.schemas import (
    ActivityEvent,
    ActivityType,
    DictionaryResponse,
    ResponseSource,
    SpellingCorrectionResult,
    WordDefinition,
)
from services.activity.tracker import ActivityLogger
from services.ai.gemini import DefinitionGenerator, GeneratedDefinition
from services.ai.spelling import SpellingCorrector
from services.dictionary.store import WordStore
from utils.exceptions import (
    LOOKUP_FAILED_MESSAGE,
    ConfigurationError,
    InvalidInputError,
    PersistenceError,
    SentellyError,
    UpstreamCallError,
)
from utils.logging import get_logger, log_lookup
from utils.request_context import CallerIdentity
from utils.sanitize import clean_query, normalize_word

logger = get_logger(__name__)

MISSING_WORD_MESSAGE = "Word parameter is required"
WORD_TOO_LONG_MESSAGE = f"Word must be at most {MAX_WORD_LENGTH} characters"


class LookupResolver:
    """
    Orchestrates spelling correction, the word store and Gemini.

    The resolver alone decides which word string is used for the store
    lookup and for generation (the effective key).
    """

    def __init__(
        self,
        store: WordStore,
        generator: Optional[DefinitionGenerator],
        corrector: SpellingCorrector,
        activity: ActivityLogger,
    ):
        self.store = store
        self.generator = generator
        self.corrector = corrector
        self.activity = activity

    async def resolve(
        self,
        query: Optional[str],
        ignore_correction: bool = False,
        caller: Optional[CallerIdentity] = None,
    ) -> DictionaryResponse:
        """
        Resolve a query into a definition.

        Args:
            query: Raw text typed by the user
            ignore_correction: Skip the spelling check entirely
            caller: Optional identity and request context for the activity log

        Returns:
            DictionaryResponse tagged with source database or gemini

        Raises:
            InvalidInputError: Empty or over-long query (no vendor is called)
            UpstreamCallError / UpstreamParseError: Generation failed
        """
        started = time.perf_counter()
        caller = caller or CallerIdentity()
        raw = clean_query(query)

        if not raw:
            await self._track(
                caller, started,
                word=None,
                source=ResponseSource.ERROR,
                success=False,
                error=MISSING_WORD_MESSAGE,
            )
            raise InvalidInputError(MISSING_WORD_MESSAGE)

        if len(raw) > MAX_WORD_LENGTH:
            await self._track(
                caller, started,
                word=None,
                source=ResponseSource.ERROR,
                success=False,
                error=WORD_TOO_LONG_MESSAGE,
            )
            raise InvalidInputError(WORD_TOO_LONG_MESSAGE)

        correction: Optional[SpellingCorrectionResult] = None
        key = normalize_word(raw)
        tokens_used = 0

        try:
            if not ignore_correction:
                correction = await self._check_spelling(raw)
                if correction is not None:
                    key = normalize_word(correction.suggested_word)

            record = await self._find(key)

            if record is not None:
                response = _response_from_record(record, key)
            else:
                generated = await self._generate(key)
                tokens_used = generated.tokens_used
                saved = await self._save(generated.definition, key)
                response = _response_from_definition(generated.definition, key, saved)

        except SentellyError as e:
            await self._fail(caller, started, key, raw, correction, e.message)
            raise
        except Exception as e:
            await self._fail(caller, started, key, raw, correction, str(e))
            raise UpstreamCallError(f"Lookup failed: {e}", service="lookup") from e

        if correction is not None:
            response.original_word = raw
            response.suggested_word = correction.suggested_word
            response.alternative_suggestions = list(correction.alternative_suggestions)
            response.is_correction_suggested = True

        metadata: Dict[str, Any] = {
            "cache_hit": response.source == ResponseSource.DATABASE,
            "ignore_correction": ignore_correction,
        }
        if response.source == ResponseSource.GEMINI:
            metadata["gemini_model"] = self.generator.model
        if correction is not None:
            metadata["original_word"] = raw
            metadata["suggested_word"] = correction.suggested_word
            metadata["correction_source"] = "gemini"

        elapsed = await self._track(
            caller, started,
            word=key,
            source=response.source,
            success=True,
            tokens_used=tokens_used,
            metadata=metadata,
        )
        log_lookup(key, response.source.value, success=True, duration_ms=elapsed)
        return response

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    async def _check_spelling(self, raw: str) -> Optional[SpellingCorrectionResult]:
        """Return the verdict only when it changes the effective key."""
        verdict = await self.corrector.check(raw)
        if not verdict.has_correction:
            return None

        suggested = clean_query(verdict.suggested_word)
        if not suggested or normalize_word(suggested) == normalize_word(raw):
            return None

        return verdict.model_copy(update={"suggested_word": suggested})

    async def _generate(self, key: str) -> GeneratedDefinition:
        if self.generator is None:
            raise ConfigurationError(
                "GOOGLE_API_KEY is not set",
                setting="GOOGLE_API_KEY",
                public_message=LOOKUP_FAILED_MESSAGE,
            )
        return await self.generator.generate(key)

    async def _find(self, key: str) -> Optional[WordDocument]:
        """Store read; a failed read counts as a miss."""
        try:
            return await self.store.get_word(key)
        except PersistenceError as e:
            logger.error(f"Word store read failed, treating as miss: {e.message}")
            return None

    async def _save(self, definition: WordDefinition, key: str) -> Optional[WordDocument]:
        """Best-effort store write; the response never depends on it."""
        try:
            return await self.store.save_word(definition, key=key)
        except PersistenceError as e:
            logger.error(f"Word store write failed, returning unsaved definition: {e.message}")
            return None

    async def _fail(
        self,
        caller: CallerIdentity,
        started: float,
        key: str,
        raw: str,
        correction: Optional[SpellingCorrectionResult],
        error: str,
    ) -> None:
        metadata: Dict[str, Any] = {}
        if correction is not None:
            metadata["original_word"] = raw
            metadata["suggested_word"] = correction.suggested_word

        elapsed = await self._track(
            caller, started,
            word=key,
            source=ResponseSource.ERROR,
            success=False,
            error=error,
            metadata=metadata,
        )
        log_lookup(key, ResponseSource.ERROR.value, success=False, duration_ms=elapsed, details=error)

    async def _track(
        self,
        caller: CallerIdentity,
        started: float,
        word: Optional[str],
        source: ResponseSource,
        success: bool,
        tokens_used: int = 0,
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> float:
        """Record the activity event and return the measured latency in ms."""
        elapsed = (time.perf_counter() - started) * 1000
        event = ActivityEvent(
            user_id=caller.user_id,
            user_email=caller.user_email,
            activity_type=ActivityType.WORD_SEARCH,
            word_searched=word,
            response_source=source,
            tokens_used=tokens_used or None,
            response_time=int(round(elapsed)),
            success=success,
            error_message=error,
            user_agent=caller.user_agent,
            session_id=caller.session_id,
            ip_address=caller.ip_address,
            metadata=metadata or {},
        )
        await self.activity.record(event)
        return elapsed


def _response_from_record(record: WordDocument, key: str) -> DictionaryResponse:
    return DictionaryResponse(
        word=record.word or key,
        starting=record.starting or "",
        phonetic=record.phonetic or "",
        definition=record.definition,
        examples=list(record.examples or []),
        synonyms=list(record.synonyms or []),
        usage=record.usage or "",
        pronunciation_id=record.pronunciation_id,
        source=ResponseSource.DATABASE,
    )


def _response_from_definition(
    definition: WordDefinition,
    key: str,
    saved: Optional[WordDocument],
) -> DictionaryResponse:
    return DictionaryResponse(
        word=key,
        starting=definition.starting,
        phonetic=definition.phonetic,
        definition=definition.definition,
        examples=list(definition.examples),
        synonyms=list(definition.synonyms),
        usage=definition.usage,
        pronunciation_id=saved.pronunciation_id if saved is not None else None,
        source=ResponseSource.GEMINI,
    )
