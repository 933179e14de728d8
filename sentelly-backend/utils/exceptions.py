"""
Custom Exceptions Module

Defines application-specific exceptions for clearer error handling.
All exceptions inherit from a base SentellyError for easy catching.

Each exception carries two messages: ``message`` is the internal, detailed
description used for logs and the activity log; ``public_message`` is what
the API returns to the client. Vendor detail never leaves the server.

Usage:
    from utils.exceptions import UpstreamParseError, InvalidInputError

    try:
        definition = await generator.generate(word)
    except UpstreamParseError as e:
        logger.error(f"Gemini returned garbage: {e.message}")
"""

from typing import Optional, Dict, Any


LOOKUP_FAILED_MESSAGE = "Failed to get definition"
SPEECH_FAILED_MESSAGE = "Failed to generate speech"


class SentellyError(Exception):
    """
    Base exception for all Sentelly application errors.

    Attributes:
        message: Internal, human-readable error message
        details: Additional error details (optional)
        status_code: HTTP status code to return
        public_message: Message safe to show to the client
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        public_message: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        self.public_message = public_message or message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        payload: Dict[str, Any] = {"error": self.public_message}
        # Server-side failures never expose their details
        if self.status_code < 500 and self.details:
            payload["details"] = self.details
        return payload


# =============================================================================
# Client Input
# =============================================================================

class InvalidInputError(SentellyError):
    """
    Raised when a required request parameter is missing or unusable.

    Common causes:
        - Empty or whitespace-only word
        - Missing text for pronunciation
        - Word longer than the accepted limit
    """

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"field": field, **(details or {})} if field else details,
            status_code=400
        )


# =============================================================================
# Vendor (Gemini) Exceptions
# =============================================================================

class UpstreamCallError(SentellyError):
    """
    Raised when a vendor call fails at the network or vendor level.

    Common causes:
        - Gemini API error or quota exhaustion
        - Invalid API key
        - Network failure
    """

    def __init__(
        self,
        message: str = "Upstream call failed",
        service: str = "unknown",
        details: Optional[Dict[str, Any]] = None,
        public_message: str = LOOKUP_FAILED_MESSAGE
    ):
        super().__init__(
            message=message,
            details={"service": service, **(details or {})},
            status_code=500,
            public_message=public_message
        )


class UpstreamParseError(SentellyError):
    """
    Raised when a vendor response does not match the expected schema.

    Common causes:
        - Non-JSON text from the model
        - Missing word or definition fields
        - Wrong field types (e.g. examples as a string)
    """

    def __init__(
        self,
        message: str = "Upstream response failed validation",
        service: str = "unknown",
        raw_text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={
                "service": service,
                "raw_preview": raw_text[:200] if raw_text else None,
                **(details or {})
            },
            status_code=500,
            public_message=LOOKUP_FAILED_MESSAGE
        )


# =============================================================================
# Speech Exceptions
# =============================================================================

class SpeechGenerationError(SentellyError):
    """
    Raised when text-to-speech generation fails.

    Common causes:
        - ElevenLabs API error
        - Rate limit exceeded
        - Empty audio returned
    """

    def __init__(
        self,
        message: str = SPEECH_FAILED_MESSAGE,
        text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"text_preview": text[:50] if text else None, **(details or {})},
            status_code=500,
            public_message=SPEECH_FAILED_MESSAGE
        )


# =============================================================================
# Infrastructure Exceptions
# =============================================================================

class PersistenceError(SentellyError):
    """
    Raised when a store or storage read/write fails.

    Resolvers catch this and carry on with the data already in hand;
    it only reaches the client from the explicit activity endpoints.
    """

    def __init__(
        self,
        message: str = "Persistence operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"operation": operation, **(details or {})},
            status_code=500,
            public_message="Storage operation failed"
        )


class ConfigurationError(SentellyError):
    """
    Raised when a required secret or setting is missing.

    Fatal for the operation that needs it; never retried or downgraded.
    """

    def __init__(
        self,
        message: str = "Missing required configuration",
        setting: Optional[str] = None,
        public_message: str = "Service is not configured"
    ):
        super().__init__(
            message=message,
            details={"setting": setting},
            status_code=500,
            public_message=public_message
        )
