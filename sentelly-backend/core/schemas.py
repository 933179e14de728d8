"""
API Schemas Module

Pydantic models shared by the routers and services.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ActivityType(str, Enum):
    """Kinds of user-facing operations recorded in the activity log."""
    WORD_SEARCH = "word_search"
    AUDIO_GENERATION = "audio_generation"
    USER_REGISTRATION = "user_registration"
    USER_LOGIN = "user_login"
    SPELLING_CORRECTION_ACCEPTED = "spelling_correction_accepted"
    SPELLING_CORRECTION_DISMISSED = "spelling_correction_dismissed"


class ResponseSource(str, Enum):
    """Where a response came from."""
    DATABASE = "database"
    GEMINI = "gemini"
    CACHE = "cache"
    ERROR = "error"


# =============================================================================
# Dictionary
# =============================================================================

class WordDefinition(BaseModel):
    """Structured definition as returned by the generation vendor."""
    word: str
    starting: str = ""
    phonetic: str = ""
    definition: str
    examples: List[str] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    usage: str = ""

    @field_validator("word", "definition")
    @classmethod
    def _required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("starting", "phonetic", "usage", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("examples", "synonyms", mode="before")
    @classmethod
    def _optional_list(cls, value: Any) -> Any:
        return [] if value is None else value


class DictionaryResponse(BaseModel):
    """Payload returned by GET /api/dictionary."""
    model_config = ConfigDict(populate_by_name=True)

    word: str
    starting: str = ""
    phonetic: str = ""
    definition: str
    examples: List[str] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    usage: str = ""
    pronunciation_id: Optional[str] = None
    source: ResponseSource

    # Present only when a spelling correction was applied
    original_word: Optional[str] = Field(default=None, alias="originalWord")
    suggested_word: Optional[str] = Field(default=None, alias="suggestedWord")
    alternative_suggestions: Optional[List[str]] = Field(default=None, alias="alternativeSuggestions")
    is_correction_suggested: Optional[bool] = Field(default=None, alias="isCorrectionSuggested")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SpellingCorrectionResult(BaseModel):
    """Best-effort misspelling verdict. Never persisted."""
    is_misspelling: bool = Field(default=False, description="True if the word looks misspelled")
    suggested_word: str = Field(default="", description="Most likely intended spelling, or empty")
    alternative_suggestions: List[str] = Field(
        default_factory=list,
        description="Other plausible spellings, most likely first (at most 5)"
    )

    @classmethod
    def no_correction(cls) -> "SpellingCorrectionResult":
        return cls()

    @property
    def has_correction(self) -> bool:
        """A verdict is only actionable when it names a replacement."""
        return self.is_misspelling and bool(self.suggested_word.strip())


# =============================================================================
# Activity
# =============================================================================

class ActivityCreate(BaseModel):
    """Body of POST /api/activity (the client-side "backup" write)."""
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    activity_type: ActivityType
    word_searched: Optional[str] = None
    response_source: ResponseSource
    tokens_used: Optional[int] = Field(default=None, ge=0)
    response_time: int = Field(default=0, ge=0, description="Latency in milliseconds")
    success: bool
    error_message: Optional[str] = None
    user_agent: Optional[str] = None
    session_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ActivityEvent(ActivityCreate):
    """Activity event as written to the log, with server-derived fields."""
    ip_address: Optional[str] = None


class ActivityRecord(BaseModel):
    """Activity event as read back from the log."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    activity_type: str
    word_searched: Optional[str] = None
    response_source: str
    tokens_used: Optional[int] = None
    response_time: int = 0
    success: bool
    error_message: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    session_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("metadata_", "metadata")
    )
    created_at: Optional[datetime] = None
