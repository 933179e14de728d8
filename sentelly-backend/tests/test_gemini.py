"""
Tests for the Gemini definition generator.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from services.ai.gemini import DefinitionGenerator
from utils.exceptions import ConfigurationError, UpstreamCallError, UpstreamParseError


def _client_returning(response=None, error=None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


def _response(payload, tokens=57):
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return SimpleNamespace(text=text, usage_metadata=SimpleNamespace(total_token_count=tokens))


def test_requires_api_key_or_client():
    with pytest.raises(ConfigurationError):
        DefinitionGenerator(api_key=None)


@pytest.mark.asyncio
async def test_generate_returns_definition_and_tokens():
    client = _client_returning(_response({"word": "Lucid", "definition": "Expressed clearly."}))
    generator = DefinitionGenerator(model="gemini-test", client=client)

    generated = await generator.generate("lucid")

    assert generated.definition.word == "Lucid"
    assert generated.tokens_used == 57

    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert "lucid" in kwargs["contents"]
    assert kwargs["config"].temperature == 0.1
    assert kwargs["config"].top_k == 16
    assert kwargs["config"].response_mime_type == "application/json"


@pytest.mark.asyncio
async def test_call_failure_raises_upstream_call_error():
    client = _client_returning(error=RuntimeError("quota exceeded"))
    generator = DefinitionGenerator(client=client)

    with pytest.raises(UpstreamCallError) as exc_info:
        await generator.generate("lucid")

    assert "quota exceeded" in exc_info.value.message
    assert exc_info.value.to_dict() == {"error": "Failed to get definition"}


@pytest.mark.asyncio
async def test_malformed_output_raises_parse_error():
    client = _client_returning(_response("Lucid means clear."))
    generator = DefinitionGenerator(client=client)

    with pytest.raises(UpstreamParseError) as exc_info:
        await generator.generate("lucid")

    assert exc_info.value.status_code == 500
    assert exc_info.value.public_message == "Failed to get definition"


@pytest.mark.asyncio
async def test_each_call_is_attempted_once():
    client = _client_returning(error=RuntimeError("boom"))
    generator = DefinitionGenerator(client=client)

    with pytest.raises(UpstreamCallError):
        await generator.generate("lucid")

    assert client.aio.models.generate_content.await_count == 1
