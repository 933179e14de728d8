"""
Text-to-Speech Service

Provides pronunciation audio using the ElevenLabs API.

Usage:
    from services.voice.speech import SpeechService

    service = SpeechService(api_key="...")
    audio_bytes = await service.text_to_speech("serendipity")
"""

import time
from typing import Optional

import httpx

from config.constants import (
    ELEVENLABS_API_BASE,
    SPEECH_REQUEST_TIMEOUT_SECONDS,
    VOICE_SIMILARITY_BOOST,
    VOICE_STABILITY,
)
from utils.logging import get_logger, log_api_call
from utils.exceptions import ConfigurationError, SpeechGenerationError

logger = get_logger(__name__)


class SpeechService:
    """
    ElevenLabs Text-to-Speech service.

    Attributes:
        api_key: ElevenLabs API key (None = synthesis unavailable)
        voice_id: Voice to use (Rachel by default)
        model: TTS model
    """

    DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"  # Rachel
    DEFAULT_MODEL = "eleven_monolingual_v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize speech service.

        Args:
            api_key: ElevenLabs API key
            voice_id: Voice ID to use (default: Rachel)
            model: TTS model to use (default: eleven_monolingual_v1)
            client: Shared httpx client (injectable for tests)
        """
        self.api_key = api_key
        self.voice_id = voice_id or self.DEFAULT_VOICE_ID
        self.model = model or self.DEFAULT_MODEL
        self._client = client

        if not self.api_key:
            logger.warning("ElevenLabs API key not configured - TTS disabled")
        else:
            logger.info("SpeechService initialized")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=ELEVENLABS_API_BASE,
                timeout=SPEECH_REQUEST_TIMEOUT_SECONDS
            )
        return self._client

    async def text_to_speech(self, text: str) -> bytes:
        """
        Convert text to speech audio.

        Args:
            text: Text to speak

        Returns:
            bytes: MP3 audio

        Raises:
            ConfigurationError: No API key configured
            SpeechGenerationError: Vendor or network failure, or empty audio
        """
        if not self.api_key:
            raise ConfigurationError("ELEVENLABS_API_KEY is not set", setting="ELEVENLABS_API_KEY")

        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self.api_key
        }

        data = {
            "text": text,
            "model_id": self.model,
            "voice_settings": {
                "stability": VOICE_STABILITY,
                "similarity_boost": VOICE_SIMILARITY_BOOST
            }
        }

        started = time.perf_counter()
        try:
            logger.debug(f"Generating speech for: '{text[:50]}'")
            response = await self._get_client().post(
                f"{ELEVENLABS_API_BASE}/text-to-speech/{self.voice_id}",
                json=data,
                headers=headers,
            )
        except httpx.HTTPError as e:
            elapsed = (time.perf_counter() - started) * 1000
            log_api_call("ElevenLabs", "text-to-speech", success=False, duration_ms=elapsed, error=str(e))
            raise SpeechGenerationError(f"ElevenLabs request failed: {e}", text=text) from e

        elapsed = (time.perf_counter() - started) * 1000

        if response.status_code != 200:
            error_msg = f"Status {response.status_code}: {response.text[:200]}"
            log_api_call("ElevenLabs", "text-to-speech", success=False, duration_ms=elapsed, error=error_msg)
            raise SpeechGenerationError(f"ElevenLabs API error: {error_msg}", text=text)

        if not response.content:
            log_api_call("ElevenLabs", "text-to-speech", success=False, duration_ms=elapsed, error="No audio returned")
            raise SpeechGenerationError("ElevenLabs returned no audio", text=text)

        log_api_call("ElevenLabs", "text-to-speech", success=True, duration_ms=elapsed)
        logger.debug(f"Speech generated: {len(response.content)} bytes")
        return response.content

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
