"""
Activity Services

Activity log persistence and the analytics built on top of it.
"""

from .tracker import ActivityLogger
from .analytics import summarize_activity, summarize_user_stats, timeframe_start

__all__ = [
    "ActivityLogger",
    "summarize_activity",
    "summarize_user_stats",
    "timeframe_start",
]
