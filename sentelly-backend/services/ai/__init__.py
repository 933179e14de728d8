# AI services module

from .gemini import DefinitionGenerator, GeneratedDefinition
from .spelling import SpellingCorrector
from .validator import parse_definition, DefinitionParseResult

__all__ = [
    "DefinitionGenerator",
    "GeneratedDefinition",
    "SpellingCorrector",
    "parse_definition",
    "DefinitionParseResult",
]
