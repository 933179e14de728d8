"""
FastAPI Dependencies Module

Provides dependency injection for services and shared state.
All service instances are singletons to reuse connections/resources.

Usage:
    from core.dependencies import get_lookup_resolver

    @router.get("/api/dictionary")
    async def lookup(
        resolver: LookupResolver = Depends(get_lookup_resolver)
    ):
        ...
"""

from typing import Dict, Any

from config.settings import settings
from utils.cache import TTLCache
from utils.logging import get_logger

# Lazy imports to avoid circular dependencies
_word_store = None
_audio_storage = None
_definition_generator = None
_spelling_corrector = None
_speech_service = None
_activity_logger = None
_audio_cache = None
_lookup_resolver = None
_audio_resolver = None
_initialized = False

logger = get_logger(__name__)


# =============================================================================
# Service Initialization
# =============================================================================

def _initialize_services() -> None:
    """
    Initialize all service singletons.

    Called lazily on first access to any service.
    Logs warnings if required API keys are missing.
    """
    global _word_store, _audio_storage, _definition_generator, _spelling_corrector
    global _speech_service, _activity_logger, _audio_cache
    global _lookup_resolver, _audio_resolver, _initialized

    from core.database import SessionLocal
    from services.activity.tracker import ActivityLogger
    from services.ai.gemini import DefinitionGenerator
    from services.ai.spelling import SpellingCorrector
    from services.dictionary.resolver import LookupResolver
    from services.dictionary.store import WordStore
    from services.storage.audio_storage import AudioStorage
    from services.voice.audio_resolver import AudioResolver
    from services.voice.speech import SpeechService

    # Log API key status
    if not settings.GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY not configured - definition generation disabled")
    if not settings.ELEVENLABS_API_KEY:
        logger.warning("ELEVENLABS_API_KEY not configured - Text-to-speech disabled")

    _word_store = WordStore(SessionLocal)
    _activity_logger = ActivityLogger(SessionLocal)
    _audio_storage = AudioStorage(settings.STORAGE_DIR, settings.STORAGE_BUCKET_ID)

    if settings.GOOGLE_API_KEY:
        _definition_generator = DefinitionGenerator(
            api_key=settings.GOOGLE_API_KEY,
            model=settings.GEMINI_MODEL
        )
    _spelling_corrector = SpellingCorrector(
        api_key=settings.GOOGLE_API_KEY,
        model=settings.GEMINI_MODEL
    )

    _speech_service = SpeechService(
        api_key=settings.ELEVENLABS_API_KEY,
        voice_id=settings.ELEVENLABS_VOICE_ID,
        model=settings.ELEVENLABS_MODEL
    )

    _audio_cache = TTLCache(
        ttl_seconds=settings.AUDIO_CACHE_TTL_SECONDS,
        max_entries=settings.AUDIO_CACHE_MAX_ENTRIES
    )

    _lookup_resolver = LookupResolver(
        store=_word_store,
        generator=_definition_generator,
        corrector=_spelling_corrector,
        activity=_activity_logger
    )
    _audio_resolver = AudioResolver(
        store=_word_store,
        storage=_audio_storage,
        speech=_speech_service,
        activity=_activity_logger,
        cache=_audio_cache
    )

    _initialized = True
    logger.info("Services initialized successfully")


def _ensure_initialized() -> None:
    """Ensure services are initialized."""
    if not _initialized:
        _initialize_services()


# =============================================================================
# Service Providers
# =============================================================================

def get_activity_logger():
    _ensure_initialized()
    return _activity_logger


def get_lookup_resolver():
    """
    Get LookupResolver singleton for word lookups.

    Returns:
        LookupResolver: Wired to the word store, Gemini and activity log
    """
    _ensure_initialized()
    return _lookup_resolver


def get_audio_resolver():
    """
    Get AudioResolver singleton for pronunciation audio.

    Returns:
        AudioResolver: Wired to the audio cache, object storage and ElevenLabs
    """
    _ensure_initialized()
    return _audio_resolver


def get_initialized_services() -> Dict[str, Any]:
    """Which services have been constructed (for /health)."""
    return {
        "word_store": _word_store is not None and _word_store.enabled,
        "activity_logger": _activity_logger is not None and _activity_logger.enabled,
        "definition_generator": _definition_generator is not None,
        "spelling_corrector": _spelling_corrector is not None and _spelling_corrector.chain is not None,
        "speech_service": _speech_service is not None and _speech_service.configured,
        "audio_cache_entries": len(_audio_cache) if _audio_cache is not None else 0,
    }


async def shutdown_services() -> None:
    """Close network clients held by the singletons."""
    if _speech_service is not None:
        await _speech_service.aclose()
