"""
Prompts Package

LLM prompt engineering for the definition and spelling services.
"""

from services.ai.prompts.dictionary_prompts import (
    DEFINITION_SYSTEM_PROMPT,
    DEFINITION_RESPONSE_SCHEMA,
    SPELLING_SYSTEM_PROMPT,
    SPELLING_HUMAN_PROMPT,
    build_definition_prompt,
)

__all__ = [
    'DEFINITION_SYSTEM_PROMPT',
    'DEFINITION_RESPONSE_SCHEMA',
    'SPELLING_SYSTEM_PROMPT',
    'SPELLING_HUMAN_PROMPT',
    'build_definition_prompt',
]
