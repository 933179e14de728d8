"""
Gemini Definition Service

Asks Google's Gemini for a structured definition of a word.

Uses:
    - google-genai SDK (async client)
    - A fixed system prompt plus a JSON response-schema hint
    - Low-randomness decoding so repeated calls stay close to each other

Usage:
    from services.ai.gemini import DefinitionGenerator

    generator = DefinitionGenerator(api_key="...")
    generated = await generator.generate("serendipity")
    print(generated.definition.definition, generated.tokens_used)
"""

import time
from dataclasses import dataclass
from typing import Any, Optional

from google import genai
from google.genai import types

from config.constants import GENERATION_TEMPERATURE, GENERATION_TOP_P, GENERATION_TOP_K
from core.schemas import WordDefinition
from services.ai.prompts import (
    DEFINITION_SYSTEM_PROMPT,
    DEFINITION_RESPONSE_SCHEMA,
    build_definition_prompt,
)
from services.ai.validator import parse_definition, extract_token_count
from utils.logging import get_logger, log_api_call
from utils.exceptions import ConfigurationError, UpstreamCallError, UpstreamParseError

logger = get_logger(__name__)


@dataclass
class GeneratedDefinition:
    """A validated definition plus the vendor's approximate token usage."""
    definition: WordDefinition
    tokens_used: int = 0


class DefinitionGenerator:
    """
    Generation client for word definitions.

    Each call is attempted exactly once. There is no retry on failure and
    no retry on variance between calls.

    Attributes:
        model: Gemini model name
        client: google-genai client (injectable for tests)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash",
        client: Optional[Any] = None
    ):
        """
        Initialize the generator.

        Args:
            api_key: Google API key. Required unless a client is injected.
            model: Gemini model to use.
            client: Pre-built client exposing ``aio.models.generate_content``.

        Raises:
            ConfigurationError: If neither an API key nor a client is given.
        """
        if client is None and not api_key:
            raise ConfigurationError(
                "Google API key not found. Set GOOGLE_API_KEY env variable.",
                setting="GOOGLE_API_KEY"
            )

        self.model = model
        self.client = client or genai.Client(api_key=api_key)
        self.config = types.GenerateContentConfig(
            system_instruction=DEFINITION_SYSTEM_PROMPT,
            temperature=GENERATION_TEMPERATURE,
            top_p=GENERATION_TOP_P,
            top_k=GENERATION_TOP_K,
            response_mime_type="application/json",
            response_schema=DEFINITION_RESPONSE_SCHEMA,
        )

        logger.info(f"DefinitionGenerator initialized, model: {self.model}")

    async def generate(self, word: str) -> GeneratedDefinition:
        """
        Generate a definition for a word.

        Args:
            word: Effective (possibly corrected) word

        Returns:
            GeneratedDefinition: Validated definition and token estimate

        Raises:
            UpstreamCallError: Network or vendor-side failure
            UpstreamParseError: Response failed schema validation
        """
        started = time.perf_counter()

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=build_definition_prompt(word),
                config=self.config,
            )
        except Exception as e:
            elapsed = (time.perf_counter() - started) * 1000
            log_api_call("Gemini", "generate_content", success=False, duration_ms=elapsed, error=str(e))
            raise UpstreamCallError(
                f"Gemini request failed: {e}",
                service="Gemini",
                details={"word": word}
            ) from e

        elapsed = (time.perf_counter() - started) * 1000
        raw_text = getattr(response, "text", None)
        result = parse_definition(raw_text)

        if not result.ok:
            log_api_call("Gemini", "generate_content", success=False, duration_ms=elapsed, error=result.error)
            logger.error(f"Failed to parse Gemini response for '{word}': {result.error}")
            raise UpstreamParseError(
                f"Failed to parse Gemini response: {result.error}",
                service="Gemini",
                raw_text=raw_text
            )

        tokens_used = extract_token_count(response)
        log_api_call("Gemini", "generate_content", success=True, duration_ms=elapsed)
        logger.debug(f"Generated definition for '{word}' ({tokens_used} tokens)")

        return GeneratedDefinition(definition=result.definition, tokens_used=tokens_used)
