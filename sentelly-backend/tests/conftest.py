"""
Test Configuration

Pytest configuration and shared fixtures for all tests.
"""

from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.database import init_models
from core.schemas import SpellingCorrectionResult, WordDefinition
from services.activity.tracker import ActivityLogger
from services.ai.gemini import GeneratedDefinition
from services.dictionary.store import WordStore
from services.storage.audio_storage import AudioStorage
from utils.cache import TTLCache
from utils.exceptions import ConfigurationError, SpeechGenerationError


# =============================================================================
# Fakes for the vendor clients
# =============================================================================

def make_definition(word: str = "serendipity", **overrides) -> WordDefinition:
    data = {
        "word": word,
        "starting": "",
        "phonetic": "/ˌser.ənˈdɪp.ə.ti/",
        "definition": "The occurrence of events by chance in a happy way.",
        "examples": ["Finding that book was pure serendipity."],
        "synonyms": ["chance", "fluke"],
        "usage": "Used for pleasant surprises.",
    }
    data.update(overrides)
    return WordDefinition(**data)


class FakeGenerator:
    """Stands in for DefinitionGenerator; records every word it was asked for."""

    def __init__(
        self,
        tokens_used: int = 42,
        error: Optional[Exception] = None,
        vary: bool = False,
    ):
        self.model = "gemini-test"
        self.tokens_used = tokens_used
        self.error = error
        self.vary = vary
        self.calls: List[str] = []

    async def generate(self, word: str) -> GeneratedDefinition:
        self.calls.append(word)
        if self.error is not None:
            raise self.error
        if self.vary:
            # Different wording on every call, like a sampled model
            n = len(self.calls)
            definition = make_definition(
                word,
                definition=f"Meaning number {n} of {word}.",
                examples=[f"Example {n} using {word}."],
                synonyms=[f"synonym-{n}"],
            )
        else:
            definition = make_definition(word)
        return GeneratedDefinition(definition=definition, tokens_used=self.tokens_used)


class FakeCorrector:
    """Stands in for SpellingCorrector with a fixed verdict."""

    def __init__(self, verdict: Optional[SpellingCorrectionResult] = None):
        self.verdict = verdict or SpellingCorrectionResult.no_correction()
        self.calls: List[str] = []

    async def check(self, word: str) -> SpellingCorrectionResult:
        self.calls.append(word)
        return self.verdict


class FakeSpeech:
    """Stands in for SpeechService."""

    def __init__(self, audio: bytes = b"ID3-fake-mp3", configured: bool = True, fail: bool = False):
        self.audio = audio
        self.configured = configured
        self.fail = fail
        self.calls: List[str] = []

    async def text_to_speech(self, text: str) -> bytes:
        self.calls.append(text)
        if not self.configured:
            raise ConfigurationError("ELEVENLABS_API_KEY is not set", setting="ELEVENLABS_API_KEY")
        if self.fail:
            raise SpeechGenerationError("ElevenLabs API error: Status 500", text=text)
        return self.audio


class BrokenSessionFactory:
    """Session factory whose sessions fail on every use."""

    def __call__(self):
        raise RuntimeError("database unavailable")


# =============================================================================
# Persistence fixtures
# =============================================================================

@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_models(engine)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def word_store(session_factory) -> WordStore:
    return WordStore(session_factory)


@pytest.fixture
def activity_logger(session_factory) -> ActivityLogger:
    return ActivityLogger(session_factory)


@pytest.fixture
def audio_storage(tmp_path) -> AudioStorage:
    return AudioStorage(tmp_path / "storage", "pronunciation")


@pytest.fixture
def audio_cache() -> TTLCache:
    return TTLCache(ttl_seconds=60, max_entries=10)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def corrector() -> FakeCorrector:
    return FakeCorrector()


@pytest.fixture
def speech() -> FakeSpeech:
    return FakeSpeech()


# =============================================================================
# API client
# =============================================================================

@pytest_asyncio.fixture
async def client(
    word_store, activity_logger, audio_storage, audio_cache, generator, corrector, speech
) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client with every service wired to test doubles."""
    from main import app
    from core import dependencies
    from services.dictionary.resolver import LookupResolver
    from services.voice.audio_resolver import AudioResolver
    from utils.rate_limit import limiter

    lookup_resolver = LookupResolver(word_store, generator, corrector, activity_logger)
    audio_resolver = AudioResolver(word_store, audio_storage, speech, activity_logger, audio_cache)

    app.dependency_overrides[dependencies.get_lookup_resolver] = lambda: lookup_resolver
    app.dependency_overrides[dependencies.get_audio_resolver] = lambda: audio_resolver
    app.dependency_overrides[dependencies.get_activity_logger] = lambda: activity_logger
    limiter.enabled = False

    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    limiter.enabled = True
