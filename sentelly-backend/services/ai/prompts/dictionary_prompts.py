"""
Dictionary Prompts

Prompt templates and response schemas for the Gemini-backed definition
and spelling services.
"""

DEFINITION_SYSTEM_PROMPT = """You are a dictionary API that provides detailed word definitions.
CRITICAL: You must ONLY return a valid JSON object with no additional text, markdown, or formatting.
The response must be a single JSON object in this exact format:
{
  "word": "the word being defined",
  "starting": "the determiner that naturally precedes the word: A, An or The",
  "phonetic": "phonetic pronunciation",
  "definition": "a single sentence definition that starts with the word and its phonetic",
  "examples": ["example sentences", "using the word"],
  "synonyms": ["list", "of", "synonyms"],
  "usage": "description of how the word is typically used"
}
Do not include any explanations, notes, or additional text before or after the JSON."""


def build_definition_prompt(word: str) -> str:
    return f"Define the word: {word}"


# Response schema hint passed to Gemini alongside the prompt
DEFINITION_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "word": {"type": "STRING"},
        "starting": {"type": "STRING"},
        "phonetic": {"type": "STRING"},
        "definition": {"type": "STRING"},
        "examples": {"type": "ARRAY", "items": {"type": "STRING"}},
        "synonyms": {"type": "ARRAY", "items": {"type": "STRING"}},
        "usage": {"type": "STRING"},
    },
    "required": ["word", "starting", "definition", "examples", "synonyms", "usage"],
    "property_ordering": [
        "word", "starting", "phonetic", "definition", "examples", "synonyms", "usage"
    ],
}


SPELLING_SYSTEM_PROMPT = """You are a spelling checker for an English dictionary.
Decide whether the word typed by the user is a misspelling of a real English word.

RULES:
1. Real words, proper nouns, abbreviations and valid variant spellings are NOT misspellings.
2. If it IS a misspelling, put the most likely intended word in "suggested_word".
3. Put up to 5 other plausible intended words in "alternative_suggestions", most likely first.
4. If it is NOT a misspelling, set "suggested_word" to "" and "alternative_suggestions" to [].

Return ONLY valid JSON matching this schema:
{format_instructions}"""

SPELLING_HUMAN_PROMPT = "Word: {word}"
