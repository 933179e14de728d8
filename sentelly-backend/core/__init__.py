"""
Core Module

Provides database, models, schemas, and dependencies for the application.
"""

from .database import Base, engine, check_database_health, init_models
from .models import WordDocument, ActivityDocument
from .schemas import (
    ActivityType,
    ResponseSource,
    WordDefinition,
    DictionaryResponse,
    SpellingCorrectionResult,
    ActivityCreate,
    ActivityEvent,
    ActivityRecord,
)
from .dependencies import (
    get_activity_logger,
    get_lookup_resolver,
    get_audio_resolver,
    get_initialized_services,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "check_database_health",
    "init_models",
    # Models
    "WordDocument",
    "ActivityDocument",
    # Schemas
    "ActivityType",
    "ResponseSource",
    "WordDefinition",
    "DictionaryResponse",
    "SpellingCorrectionResult",
    "ActivityCreate",
    "ActivityEvent",
    "ActivityRecord",
    # Dependencies
    "get_activity_logger",
    "get_lookup_resolver",
    "get_audio_resolver",
    "get_initialized_services",
]
