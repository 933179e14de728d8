"""
Tests for audio object storage
"""

import pytest

from utils.exceptions import PersistenceError


@pytest.mark.asyncio
async def test_save_and_get_audio(audio_storage):
    file_id = await audio_storage.save_audio(b"ID3-bytes", "serendipity.mp3")

    assert len(file_id) == 32
    assert (audio_storage.bucket_dir / f"{file_id}.mp3").exists()
    assert await audio_storage.get_audio(file_id) == b"ID3-bytes"


@pytest.mark.asyncio
async def test_each_save_gets_a_new_id(audio_storage):
    first = await audio_storage.save_audio(b"a", "word.mp3")
    second = await audio_storage.save_audio(b"a", "word.mp3")
    assert first != second


@pytest.mark.asyncio
async def test_empty_audio_rejected(audio_storage):
    with pytest.raises(PersistenceError):
        await audio_storage.save_audio(b"", "empty.mp3")


@pytest.mark.asyncio
async def test_missing_file_raises(audio_storage):
    with pytest.raises(PersistenceError):
        await audio_storage.get_audio("0" * 32)


@pytest.mark.asyncio
async def test_invalid_ids_rejected(audio_storage):
    for file_id in ("", "../../etc/passwd", "ABC", "g" * 32):
        with pytest.raises(PersistenceError):
            await audio_storage.get_audio(file_id)
