"""
Definition Response Validator

Turns raw Gemini output into a validated WordDefinition. Parsing never
raises: callers get a tagged DefinitionParseResult and decide what a
failure means for them.

Usage:
    from services.ai.validator import parse_definition

    result = parse_definition(response.text)
    if not result.ok:
        raise UpstreamParseError(result.error, service="Gemini")
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from core.schemas import WordDefinition


@dataclass(frozen=True)
class DefinitionParseResult:
    """Either a validated definition or the reason validation failed."""
    ok: bool
    definition: Optional[WordDefinition] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, definition: WordDefinition) -> "DefinitionParseResult":
        return cls(ok=True, definition=definition)

    @classmethod
    def failure(cls, error: str) -> "DefinitionParseResult":
        return cls(ok=False, error=error)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    clean_text = text.strip()
    if clean_text.startswith("```"):
        clean_text = clean_text[3:]
        if clean_text.lower().startswith("json"):
            clean_text = clean_text[4:]
        if clean_text.rstrip().endswith("```"):
            clean_text = clean_text.rstrip()[:-3]
    return clean_text.strip()


def parse_definition(raw_text: Optional[str]) -> DefinitionParseResult:
    """
    Parse and validate a definition payload.

    Args:
        raw_text: Text returned by the generation vendor

    Returns:
        DefinitionParseResult: ok with a WordDefinition, or a failure reason
    """
    if not raw_text or not raw_text.strip():
        return DefinitionParseResult.failure("Empty response")

    try:
        data = json.loads(strip_code_fences(raw_text))
    except json.JSONDecodeError as e:
        return DefinitionParseResult.failure(f"Response is not valid JSON: {e}")

    # Some models wrap a single object in a list
    if isinstance(data, list) and len(data) == 1:
        data = data[0]

    if not isinstance(data, dict):
        return DefinitionParseResult.failure(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    try:
        return DefinitionParseResult.success(WordDefinition.model_validate(data))
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return DefinitionParseResult.failure(f"Invalid response structure: {fields}")


def extract_token_count(response: Any) -> int:
    """
    Approximate token usage reported with a Gemini response.

    This is an estimate taken from the vendor's usage metadata, not a
    measurement. Returns 0 when the metadata or the count is absent.
    """
    usage = getattr(response, "usage_metadata", None)
    if usage is None:
        return 0
    total = getattr(usage, "total_token_count", None)
    if isinstance(total, int) and total >= 0:
        return total
    return 0
