"""
Tests for the LangChain spelling corrector.
"""

import json

import pytest
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from services.ai.spelling import SpellingCorrector


def _llm_replying(text: str) -> RunnableLambda:
    return RunnableLambda(lambda _prompt: AIMessage(content=text))


def _failing_llm() -> RunnableLambda:
    def _raise(_prompt):
        raise RuntimeError("model overloaded")
    return RunnableLambda(_raise)


@pytest.mark.asyncio
async def test_misspelling_detected():
    reply = json.dumps({
        "is_misspelling": True,
        "suggested_word": "receive",
        "alternative_suggestions": ["relieve", "Relieve", "recite"],
    })
    corrector = SpellingCorrector(llm=_llm_replying(reply))

    verdict = await corrector.check("recieve")

    assert verdict.is_misspelling
    assert verdict.has_correction
    assert verdict.suggested_word == "receive"
    assert verdict.alternative_suggestions == ["relieve", "recite"]


@pytest.mark.asyncio
async def test_alternatives_capped_at_five():
    reply = json.dumps({
        "is_misspelling": True,
        "suggested_word": "a",
        "alternative_suggestions": ["b", "c", "d", "e", "f", "g"],
    })
    corrector = SpellingCorrector(llm=_llm_replying(reply))

    verdict = await corrector.check("aa")

    assert verdict.alternative_suggestions == ["b", "c", "d", "e", "f"]


@pytest.mark.asyncio
async def test_fenced_json_reply_is_parsed():
    reply = "```json\n" + json.dumps({"is_misspelling": False, "suggested_word": ""}) + "\n```"
    corrector = SpellingCorrector(llm=_llm_replying(reply))

    verdict = await corrector.check("house")

    assert not verdict.is_misspelling
    assert not verdict.has_correction


@pytest.mark.asyncio
async def test_model_failure_degrades_to_no_correction():
    corrector = SpellingCorrector(llm=_failing_llm())

    verdict = await corrector.check("recieve")

    assert not verdict.is_misspelling
    assert verdict.suggested_word == ""
    assert verdict.alternative_suggestions == []


@pytest.mark.asyncio
async def test_unparseable_reply_degrades_to_no_correction():
    corrector = SpellingCorrector(llm=_llm_replying("I think you meant receive"))

    verdict = await corrector.check("recieve")

    assert not verdict.has_correction


@pytest.mark.asyncio
async def test_unconfigured_corrector_never_corrects():
    corrector = SpellingCorrector(api_key=None)

    assert corrector.chain is None
    verdict = await corrector.check("recieve")
    assert not verdict.has_correction


def test_misspelling_without_suggestion_is_not_actionable():
    verdict = SpellingCorrector._coerce({"is_misspelling": True, "suggested_word": "  "})
    assert verdict.is_misspelling
    assert not verdict.has_correction
