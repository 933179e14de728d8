"""
Pronunciation Audio Resolver

Returns MP3 bytes for a word, trying the cheapest source first:

    in-process cache -> stored audio linked to the word -> ElevenLabs

Freshly synthesized audio is saved to object storage and linked to the
word's record when one exists. One activity event is recorded per call.

Usage:
    from services.voice.audio_resolver import AudioResolver

    resolver = AudioResolver(store, storage, speech, activity, cache)
    result = await resolver.resolve("serendipity")
    result.audio, result.cache_hit
"""

import time
from dataclasses import dataclass
from typing import Optional

from config.constants import MAX_WORD_LENGTH
from core.schemas import ActivityEvent, ActivityType, ResponseSource
from services.activity.tracker import ActivityLogger
from services.dictionary.store import WordStore
from services.storage.audio_storage import AudioStorage
from services.voice.speech import SpeechService
from utils.cache import TTLCache
from utils.exceptions import (
    ConfigurationError,
    InvalidInputError,
    PersistenceError,
    SentellyError,
    SpeechGenerationError,
)
from utils.logging import get_logger
from utils.request_context import CallerIdentity
from utils.sanitize import normalize_word, safe_file_stem

logger = get_logger(__name__)

MISSING_TEXT_MESSAGE = "Text parameter is required"
TEXT_TOO_LONG_MESSAGE = f"Text must be at most {MAX_WORD_LENGTH} characters"


@dataclass
class AudioResult:
    """Resolved audio plus where it came from."""
    audio: bytes
    cache_hit: bool
    layer: Optional[str] = None  # "memory", "storage" or None for fresh audio


class AudioResolver:
    """
    Orchestrates the audio cache, object storage and the speech vendor.

    Store and storage failures never fail the request; they only cost a
    fresh synthesis.
    """

    def __init__(
        self,
        store: WordStore,
        storage: Optional[AudioStorage],
        speech: SpeechService,
        activity: ActivityLogger,
        cache: Optional[TTLCache] = None,
    ):
        self.store = store
        self.storage = storage
        self.speech = speech
        self.activity = activity
        self.cache = cache

    async def resolve(
        self,
        text: Optional[str],
        caller: Optional[CallerIdentity] = None,
    ) -> AudioResult:
        """
        Resolve pronunciation audio for `text`.

        Raises:
            InvalidInputError: Empty or over-long text
            ConfigurationError: No speech key and nothing cached
            SpeechGenerationError: Synthesis failed
        """
        started = time.perf_counter()
        caller = caller or CallerIdentity()
        text = (text or "").strip()

        if not text:
            raise InvalidInputError(MISSING_TEXT_MESSAGE)

        key = normalize_word(text)
        if len(key) > MAX_WORD_LENGTH:
            raise InvalidInputError(TEXT_TOO_LONG_MESSAGE)

        try:
            result = await self._resolve(text, key)
        except SentellyError as e:
            await self._track(caller, started, key, success=False, error=e.message)
            if isinstance(e, (ConfigurationError, SpeechGenerationError)):
                raise
            raise SpeechGenerationError(e.message, text=text) from e
        except Exception as e:
            await self._track(caller, started, key, success=False, error=str(e))
            raise SpeechGenerationError(f"Audio resolution failed: {e}", text=text) from e

        await self._track(caller, started, key, success=True, result=result)
        return result

    async def _resolve(self, text: str, key: str) -> AudioResult:
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug(f"Audio cache hit (memory): {key}")
                return AudioResult(audio=cached, cache_hit=True, layer="memory")

        record = None
        try:
            record = await self.store.get_word(key)
        except PersistenceError as e:
            logger.error(f"Word store read failed during audio lookup: {e.message}")

        if record is not None and record.pronunciation_id and self.storage is not None:
            try:
                audio = await self.storage.get_audio(record.pronunciation_id)
                self._remember(key, audio)
                logger.debug(f"Audio cache hit (storage): {key}")
                return AudioResult(audio=audio, cache_hit=True, layer="storage")
            except PersistenceError as e:
                logger.warning(f"Stored audio unavailable for '{key}', regenerating: {e.message}")

        audio = await self.speech.text_to_speech(text)

        if record is not None and self.storage is not None:
            await self._persist(record.id, key, audio)

        self._remember(key, audio)
        return AudioResult(audio=audio, cache_hit=False)

    async def _persist(self, record_id: str, key: str, audio: bytes) -> None:
        """Best-effort: store the audio and link it to the word record."""
        try:
            file_id = await self.storage.save_audio(audio, f"{safe_file_stem(key)}.mp3")
            await self.store.set_pronunciation(record_id, file_id)
        except PersistenceError as e:
            logger.error(f"Failed to persist pronunciation for '{key}': {e.message}")

    def _remember(self, key: str, audio: bytes) -> None:
        if self.cache is not None:
            self.cache.set(key, audio)

    async def _track(
        self,
        caller: CallerIdentity,
        started: float,
        word: str,
        success: bool,
        result: Optional[AudioResult] = None,
        error: Optional[str] = None,
    ) -> None:
        elapsed = (time.perf_counter() - started) * 1000
        metadata = {}
        if result is not None:
            metadata["cache_hit"] = result.cache_hit
            if result.layer:
                metadata["cache_layer"] = result.layer

        await self.activity.record(ActivityEvent(
            user_id=caller.user_id,
            user_email=caller.user_email,
            activity_type=ActivityType.AUDIO_GENERATION,
            word_searched=word,
            response_source=ResponseSource.CACHE if success else ResponseSource.ERROR,
            response_time=int(round(elapsed)),
            success=success,
            error_message=error,
            user_agent=caller.user_agent,
            session_id=caller.session_id,
            ip_address=caller.ip_address,
            metadata=metadata,
        ))
