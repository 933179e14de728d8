"""
Utilities Module

Provides shared utilities across the application:
- Logging configuration
- Custom exceptions
- Rate limiting
- Input sanitization
- Request context (client IP, caller identity)
- In-memory TTL cache
"""

from .logging import get_logger, setup_logging, log_api_call, log_lookup
from .exceptions import (
    SentellyError,
    InvalidInputError,
    UpstreamCallError,
    UpstreamParseError,
    SpeechGenerationError,
    PersistenceError,
    ConfigurationError,
)
from .rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    RATE_LIMITS,
    limit_lookup,
    limit_speech,
    limit_activity,
)
from .sanitize import (
    sanitize_string,
    clean_query,
    normalize_word,
    safe_file_stem,
)
from .request_context import (
    CallerIdentity,
    build_caller_identity,
    get_client_ip,
    resolve_client_ip,
)
from .cache import TTLCache

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_lookup",
    # Exceptions
    "SentellyError",
    "InvalidInputError",
    "UpstreamCallError",
    "UpstreamParseError",
    "SpeechGenerationError",
    "PersistenceError",
    "ConfigurationError",
    # Rate Limiting
    "limiter",
    "rate_limit_exceeded_handler",
    "RATE_LIMITS",
    "limit_lookup",
    "limit_speech",
    "limit_activity",
    # Sanitization
    "sanitize_string",
    "clean_query",
    "normalize_word",
    "safe_file_stem",
    # Request context
    "CallerIdentity",
    "build_caller_identity",
    "get_client_ip",
    "resolve_client_ip",
    # Caching
    "TTLCache",
]
