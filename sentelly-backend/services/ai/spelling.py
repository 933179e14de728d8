"""
Spelling Correction Service (LangChain)

Asks Gemini whether a searched word is misspelled and what was meant.
Spelling correction is an enhancement, not a requirement: every failure
degrades to "not misspelled, no suggestions".

Usage:
    from services.ai.spelling import SpellingCorrector

    corrector = SpellingCorrector(api_key="...")
    verdict = await corrector.check("recieve")
    if verdict.has_correction:
        print(verdict.suggested_word)
"""

import time
from typing import Any, Dict, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import JsonOutputParser
from langchain_core.prompts import ChatPromptTemplate

from config.constants import MAX_ALTERNATIVE_SUGGESTIONS, SPELLING_TEMPERATURE
from core.schemas import SpellingCorrectionResult
from services.ai.prompts import SPELLING_SYSTEM_PROMPT, SPELLING_HUMAN_PROMPT
from utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


class SpellingCorrector:
    """
    LangChain-powered misspelling check.

    Attributes:
        llm: Chat model (ChatGoogleGenerativeAI by default), None if unconfigured
        chain: prompt | llm | JSON parser
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash",
        llm: Optional[Any] = None
    ):
        """
        Initialize the corrector.

        Args:
            api_key: Google API key, used when no llm is injected.
            model: Gemini model to use.
            llm: Pre-built LangChain chat model or runnable.
        """
        self.parser = JsonOutputParser(pydantic_object=SpellingCorrectionResult)
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", SPELLING_SYSTEM_PROMPT),
            ("human", SPELLING_HUMAN_PROMPT),
        ]).partial(format_instructions=self.parser.get_format_instructions())

        self.llm = llm if llm is not None else self._build_llm(api_key, model)
        self.chain = self.prompt | self.llm | self.parser if self.llm is not None else None

        if self.chain is None:
            logger.warning("Spelling correction disabled - no Gemini model configured")

    @staticmethod
    def _build_llm(api_key: Optional[str], model: str) -> Optional[BaseChatModel]:
        if not api_key:
            return None

        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=SPELLING_TEMPERATURE,
        )

    async def check(self, word: str) -> SpellingCorrectionResult:
        """
        Check a word for misspelling.

        Args:
            word: Raw query as typed by the user

        Returns:
            SpellingCorrectionResult: Verdict, or no-correction on any failure
        """
        if self.chain is None or not word or not word.strip():
            return SpellingCorrectionResult.no_correction()

        started = time.perf_counter()
        try:
            raw = await self.chain.ainvoke({"word": word.strip()})
            verdict = self._coerce(raw)
        except Exception as e:
            elapsed = (time.perf_counter() - started) * 1000
            log_api_call("Gemini-LangChain", "spelling_check", success=False, duration_ms=elapsed, error=str(e))
            logger.warning(f"Spelling check failed for '{word}', continuing without correction: {e}")
            return SpellingCorrectionResult.no_correction()

        elapsed = (time.perf_counter() - started) * 1000
        log_api_call("Gemini-LangChain", "spelling_check", success=True, duration_ms=elapsed)

        if verdict.is_misspelling:
            logger.info(f"Spelling: '{word}' -> '{verdict.suggested_word}' ({verdict.alternative_suggestions})")
        return verdict

    @staticmethod
    def _coerce(raw: Any) -> SpellingCorrectionResult:
        """Normalize whatever the parser produced into a clean verdict."""
        if not isinstance(raw, dict):
            raise ValueError(f"Expected a JSON object, got {type(raw).__name__}")

        data: Dict[str, Any] = dict(raw)
        suggested = str(data.get("suggested_word") or "").strip()
        alternatives = data.get("alternative_suggestions") or []
        if not isinstance(alternatives, list):
            alternatives = []

        seen = set()
        cleaned: List[str] = []
        for alternative in alternatives:
            alternative = str(alternative).strip()
            if alternative and alternative.lower() not in seen:
                seen.add(alternative.lower())
                cleaned.append(alternative)

        return SpellingCorrectionResult(
            is_misspelling=bool(data.get("is_misspelling")),
            suggested_word=suggested,
            alternative_suggestions=cleaned[:MAX_ALTERNATIVE_SUGGESTIONS],
        )
