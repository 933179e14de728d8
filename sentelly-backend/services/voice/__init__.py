# Voice services module

from .speech import SpeechService
from .audio_resolver import AudioResolver, AudioResult

__all__ = ["SpeechService", "AudioResolver", "AudioResult"]
