"""
Routers Module

API routers for the Sentelly dictionary backend.
"""

from .dictionary import router as dictionary_router
from .speech import router as speech_router
from .activity import router as activity_router
from .analytics import router as analytics_router

__all__ = ["dictionary_router", "speech_router", "activity_router", "analytics_router"]
