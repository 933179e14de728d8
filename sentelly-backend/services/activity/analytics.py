"""
Activity Analytics

Aggregates activity-log events into the figures shown on the dashboard.
Both summaries are pure functions over already-fetched records.

Server-side events and the client's "backup" events for the same
operation are both stored, so every count here may include both.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from config.constants import RECENT_ACTIVITY_COUNT
from core.schemas import ActivityRecord, ActivityType, ResponseSource
from utils.exceptions import InvalidInputError

TIMEFRAMES = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}

DOUBLE_COUNT_NOTE = (
    "Counts include both server-recorded events and client backup events, "
    "so a single lookup may be counted twice."
)


def timeframe_start(timeframe: str = "day", now: Optional[datetime] = None) -> datetime:
    """
    Start of the analytics window ending at `now` (UTC).

    Raises:
        InvalidInputError: Unknown timeframe
    """
    window = TIMEFRAMES.get((timeframe or "day").lower())
    if window is None:
        raise InvalidInputError(
            f"Unknown timeframe: {timeframe}",
            field="timeframe",
            details={"allowed": sorted(TIMEFRAMES)}
        )
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    return now - window


def _success_rate(activities: List[ActivityRecord]) -> float:
    if not activities:
        return 0.0
    successful = sum(1 for a in activities if a.success)
    return round(successful / len(activities) * 100, 2)


def _source_breakdown(activities: Iterable[ActivityRecord]) -> Dict[str, int]:
    breakdown = {source.value: 0 for source in ResponseSource}
    for activity in activities:
        source = activity.response_source
        if source not in breakdown:
            source = ResponseSource.ERROR.value
        breakdown[source] += 1
    return breakdown


def summarize_activity(activities: List[ActivityRecord]) -> Dict[str, Any]:
    """
    Site-wide word-search summary for GET /api/analytics.

    Args:
        activities: word_search events inside the requested timeframe
    """
    total = len(activities)
    unique_words = {a.word_searched for a in activities if a.word_searched}
    total_time = sum(a.response_time or 0 for a in activities)

    return {
        "totalSearches": total,
        "uniqueWords": len(unique_words),
        "totalTokensUsed": sum(a.tokens_used or 0 for a in activities),
        "averageResponseTime": round(total_time / total, 2) if total else 0,
        "successRate": _success_rate(activities),
        "sourceBreakdown": _source_breakdown(activities),
        "notes": [DOUBLE_COUNT_NOTE],
    }


def summarize_user_stats(activities: List[ActivityRecord]) -> Dict[str, Any]:
    """
    Per-user summary for GET /api/user-stats.

    Args:
        activities: The user's most recent events, newest first
    """
    searches = [a for a in activities if a.activity_type == ActivityType.WORD_SEARCH.value]
    audio = [a for a in activities if a.activity_type == ActivityType.AUDIO_GENERATION.value]
    total = len(activities)
    total_time = sum(a.response_time or 0 for a in activities)

    return {
        "totalSearches": len(searches),
        "totalAudioGenerations": len(audio),
        "totalTokensUsed": sum(a.tokens_used or 0 for a in activities),
        "averageResponseTime": round(total_time / total) if total else 0,
        "successRate": _success_rate(activities),
        "uniqueWordsSearched": len({a.word_searched.lower() for a in searches if a.word_searched}),
        "sourceBreakdown": _source_breakdown(activities),
        "recentActivity": [
            a.model_dump(mode="json") for a in activities[:RECENT_ACTIVITY_COUNT]
        ],
        "notes": [DOUBLE_COUNT_NOTE],
    }
