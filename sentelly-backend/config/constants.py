"""
Application Constants

Centralizes magic numbers and vendor parameters for the dictionary service.

Usage:
    from config.constants import GENERATION_TEMPERATURE, MAX_ALTERNATIVE_SUGGESTIONS
"""

# =============================================================================
# Definition Generation (Gemini)
# =============================================================================

# Low randomness so repeated lookups of a word stay close to each other
GENERATION_TEMPERATURE = 0.1
GENERATION_TOP_P = 0.1
GENERATION_TOP_K = 16

# Spelling verdicts should be as deterministic as the vendor allows
SPELLING_TEMPERATURE = 0.0

# Maximum alternative spellings surfaced to the client
MAX_ALTERNATIVE_SUGGESTIONS = 5


# =============================================================================
# Speech Synthesis (ElevenLabs)
# =============================================================================

ELEVENLABS_API_BASE = "https://api.elevenlabs.io/v1"

VOICE_STABILITY = 0.5
VOICE_SIMILARITY_BOOST = 0.75

SPEECH_REQUEST_TIMEOUT_SECONDS = 30.0

# Browser cache lifetime for pronunciation audio responses
AUDIO_CACHE_CONTROL = "public, max-age=86400"


# =============================================================================
# Input Validation
# =============================================================================

# Longest query accepted by the lookup and audio routes
MAX_WORD_LENGTH = 100

# Longest error message stored in an activity event
MAX_ERROR_MESSAGE_LENGTH = 1000


# =============================================================================
# Activity Log
# =============================================================================

DEFAULT_ACTIVITY_LIMIT = 100
MAX_ACTIVITY_LIMIT = 1000

# Upper bound of events aggregated for one analytics timeframe
ANALYTICS_SCAN_LIMIT = 10000

# Number of events returned as "recent activity" on the user dashboard
RECENT_ACTIVITY_COUNT = 20

# Loopback addresses rewritten for local development legibility
LOOPBACK_ADDRESSES = {"::1", "127.0.0.1", "localhost"}
LOCAL_DEV_IP_MARKER = "localhost-dev"
