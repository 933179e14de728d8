"""
Tests for the Pronunciation Audio Resolver
"""

import pytest

from services.voice.audio_resolver import AudioResolver
from services.dictionary.store import WordStore
from utils.exceptions import ConfigurationError, InvalidInputError, SpeechGenerationError

from conftest import BrokenSessionFactory, FakeSpeech, make_definition


@pytest.fixture
def resolver(word_store, audio_storage, speech, activity_logger, audio_cache) -> AudioResolver:
    return AudioResolver(word_store, audio_storage, speech, activity_logger, audio_cache)


@pytest.mark.asyncio
async def test_empty_text_rejected(resolver, speech):
    for text in (None, "", "  "):
        with pytest.raises(InvalidInputError) as exc_info:
            await resolver.resolve(text)
        assert exc_info.value.to_dict() == {"error": "Text parameter is required"}
    assert speech.calls == []


class EchoSpeech(FakeSpeech):
    """Returns the requested text as the audio bytes."""

    async def text_to_speech(self, text: str) -> bytes:
        self.calls.append(text)
        return text.encode()


@pytest.mark.asyncio
async def test_long_text_rejected_before_any_lookup(resolver, speech, audio_cache, activity_logger):
    with pytest.raises(InvalidInputError) as exc_info:
        await resolver.resolve("a" * 100 + " first sentence")
    assert exc_info.value.status_code == 400
    assert exc_info.value.to_dict() == {"error": "Text must be at most 100 characters"}

    assert speech.calls == []
    assert len(audio_cache) == 0


@pytest.mark.asyncio
async def test_texts_sharing_a_prefix_get_their_own_audio(word_store, audio_storage, activity_logger, audio_cache):
    speech = EchoSpeech()
    resolver = AudioResolver(word_store, audio_storage, speech, activity_logger, audio_cache)
    prefix = "a" * 45

    first = await resolver.resolve(prefix + " first sentence")
    second = await resolver.resolve(prefix + " second sentence")

    assert second.cache_hit is False
    assert second.audio != first.audio
    assert second.audio == (prefix + " second sentence").encode()
    assert len(speech.calls) == 2


@pytest.mark.asyncio
async def test_unknown_word_synthesized_and_cached_in_memory(resolver, speech, audio_cache, activity_logger):
    first = await resolver.resolve("Serendipity")
    second = await resolver.resolve("serendipity")

    assert first.audio == b"ID3-fake-mp3"
    assert first.cache_hit is False
    assert second.cache_hit is True
    assert second.layer == "memory"
    assert speech.calls == ["Serendipity"]
    assert "serendipity" in audio_cache

    events = await activity_logger.list_activities()
    assert len(events) == 2
    assert all(e.activity_type == "audio_generation" for e in events)
    assert {e.metadata["cache_hit"] for e in events} == {True, False}


@pytest.mark.asyncio
async def test_known_word_audio_stored_and_linked(resolver, word_store, audio_storage, speech):
    record = await word_store.save_word(make_definition("lucid"))

    result = await resolver.resolve("lucid")
    assert result.cache_hit is False

    updated = await word_store.get_word("lucid")
    assert updated.id == record.id
    assert updated.pronunciation_id
    assert await audio_storage.get_audio(updated.pronunciation_id) == b"ID3-fake-mp3"


@pytest.mark.asyncio
async def test_stored_audio_served_without_synthesis(word_store, audio_storage, activity_logger):
    record = await word_store.save_word(make_definition("lucid"))
    file_id = await audio_storage.save_audio(b"stored-audio", "lucid.mp3")
    await word_store.set_pronunciation(record.id, file_id)

    speech = FakeSpeech(configured=False)
    resolver = AudioResolver(word_store, audio_storage, speech, activity_logger, cache=None)

    result = await resolver.resolve("Lucid")

    assert result.audio == b"stored-audio"
    assert result.cache_hit is True
    assert result.layer == "storage"
    assert speech.calls == []


@pytest.mark.asyncio
async def test_missing_stored_file_falls_through_to_synthesis(resolver, word_store, speech):
    record = await word_store.save_word(make_definition("lucid"))
    await word_store.set_pronunciation(record.id, "f" * 32)

    result = await resolver.resolve("lucid")

    assert result.cache_hit is False
    assert speech.calls == ["lucid"]
    updated = await word_store.get_word("lucid")
    assert updated.pronunciation_id != "f" * 32


@pytest.mark.asyncio
async def test_missing_key_propagates_configuration_error(word_store, audio_storage, activity_logger):
    resolver = AudioResolver(word_store, audio_storage, FakeSpeech(configured=False), activity_logger)

    with pytest.raises(ConfigurationError):
        await resolver.resolve("lucid")

    events = await activity_logger.list_activities()
    assert len(events) == 1
    assert not events[0].success
    assert events[0].response_source == "error"


@pytest.mark.asyncio
async def test_vendor_failure_raises_speech_error(word_store, audio_storage, activity_logger):
    resolver = AudioResolver(word_store, audio_storage, FakeSpeech(fail=True), activity_logger)

    with pytest.raises(SpeechGenerationError) as exc_info:
        await resolver.resolve("lucid")
    assert exc_info.value.to_dict() == {"error": "Failed to generate speech"}


@pytest.mark.asyncio
async def test_store_failure_still_synthesizes(audio_storage, speech, activity_logger):
    resolver = AudioResolver(WordStore(BrokenSessionFactory()), audio_storage, speech, activity_logger)

    result = await resolver.resolve("lucid")

    assert result.audio == b"ID3-fake-mp3"
    assert result.cache_hit is False
