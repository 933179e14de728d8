"""
Rate Limiting Middleware

Provides request rate limiting using Redis (production) or in-memory (development).
Uses slowapi for FastAPI-compatible rate limiting.

Usage:
    from utils.rate_limit import limiter, rate_limit_exceeded_handler

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from config.settings import settings
from utils.logging import get_logger
from utils.request_context import get_client_ip

logger = get_logger(__name__)


# =============================================================================
# Rate Limiter Configuration
# =============================================================================

def _get_storage_uri() -> str:
    """
    Get storage URI for rate limiter.

    Uses Redis if configured, otherwise falls back to in-memory.
    """
    if settings.REDIS_URL:
        logger.info("Rate limiter using Redis storage")
        return settings.REDIS_URL
    else:
        logger.info("Rate limiter using in-memory storage")
        return "memory://"


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["200/minute"],
    storage_uri=_get_storage_uri(),
)


# =============================================================================
# Rate Limit Presets
# =============================================================================

RATE_LIMITS = {
    "lookup": "60/minute",     # Word lookups (Gemini on cache miss)
    "speech": "60/minute",     # Pronunciation audio (ElevenLabs on cache miss)
    "activity": "120/minute",  # Client-side activity backup writes
    "default": "200/minute",   # General endpoints
}


# =============================================================================
# Exception Handler
# =============================================================================

async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded exceptions."""
    client_ip = get_client_ip(request)
    logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")

    return JSONResponse(
        status_code=429,
        content={
            "error": f"Too many requests. Limit: {exc.detail}",
            "retry_after": "60 seconds"
        },
        headers={"Retry-After": "60"}
    )


# =============================================================================
# Decorator Helpers
# =============================================================================

def limit_lookup(func):
    """Apply word lookup rate limit."""
    return limiter.limit(RATE_LIMITS["lookup"])(func)


def limit_speech(func):
    """Apply speech rate limit."""
    return limiter.limit(RATE_LIMITS["speech"])(func)


def limit_activity(func):
    """Apply activity logging rate limit."""
    return limiter.limit(RATE_LIMITS["activity"])(func)
