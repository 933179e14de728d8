"""
Storage Services

Object storage for generated pronunciation audio.
"""

from .audio_storage import AudioStorage

__all__ = ["AudioStorage"]
