"""
Tests for the Word Store
"""

import asyncio

import pytest

from services.dictionary.store import WordStore
from utils.exceptions import PersistenceError

from conftest import BrokenSessionFactory, make_definition


@pytest.mark.asyncio
async def test_save_and_get_word(word_store):
    saved = await word_store.save_word(make_definition("Serendipity"))

    assert saved.id is not None
    assert saved.word == "serendipity"
    assert saved.pronunciation_id is None

    found = await word_store.get_word("SERENDIPITY")
    assert found is not None
    assert found.id == saved.id
    assert found.examples == ["Finding that book was pure serendipity."]


@pytest.mark.asyncio
async def test_save_uses_explicit_key(word_store):
    saved = await word_store.save_word(make_definition("Receive"), key="receive")
    assert saved.word == "receive"


@pytest.mark.asyncio
async def test_get_missing_word_returns_none(word_store):
    assert await word_store.get_word("nonexistent") is None
    assert await word_store.get_word("   ") is None


@pytest.mark.asyncio
async def test_duplicates_allowed_and_oldest_wins(word_store):
    first = await word_store.save_word(make_definition("echo", definition="First."))
    await asyncio.sleep(0.01)
    await word_store.save_word(make_definition("echo", definition="Second."))

    assert await word_store.count_words("echo") == 2
    found = await word_store.get_word("echo")
    assert found.id == first.id


@pytest.mark.asyncio
async def test_set_pronunciation(word_store):
    saved = await word_store.save_word(make_definition("lucid"))

    assert await word_store.set_pronunciation(saved.id, "a" * 32) is True
    assert await word_store.set_pronunciation("missing", "b" * 32) is False

    found = await word_store.get_word("lucid")
    assert found.pronunciation_id == "a" * 32


@pytest.mark.asyncio
async def test_disabled_store_is_a_no_op():
    store = WordStore(None)

    assert not store.enabled
    assert await store.get_word("lucid") is None
    assert await store.save_word(make_definition("lucid")) is None
    assert await store.set_pronunciation("id", "file") is False
    assert await store.count_words("lucid") == 0


@pytest.mark.asyncio
async def test_backend_failures_raise_persistence_error():
    store = WordStore(BrokenSessionFactory())

    with pytest.raises(PersistenceError):
        await store.get_word("lucid")
    with pytest.raises(PersistenceError):
        await store.save_word(make_definition("lucid"))
