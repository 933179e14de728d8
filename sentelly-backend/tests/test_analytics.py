"""
Tests for activity analytics
"""

from datetime import datetime

import pytest

from core.schemas import ActivityRecord
from services.activity.analytics import (
    DOUBLE_COUNT_NOTE,
    summarize_activity,
    summarize_user_stats,
    timeframe_start,
)
from utils.exceptions import InvalidInputError


def _record(n: int, **overrides) -> ActivityRecord:
    data = {
        "id": f"id{n}",
        "activity_type": "word_search",
        "word_searched": "lucid",
        "response_source": "gemini",
        "tokens_used": 10,
        "response_time": 100,
        "success": True,
    }
    data.update(overrides)
    return ActivityRecord(**data)


class TestTimeframe:

    def test_windows(self):
        now = datetime(2026, 3, 31, 12, 0, 0)
        assert timeframe_start("day", now) == datetime(2026, 3, 30, 12, 0, 0)
        assert timeframe_start("week", now) == datetime(2026, 3, 24, 12, 0, 0)
        assert timeframe_start("month", now) == datetime(2026, 3, 1, 12, 0, 0)

    def test_unknown_timeframe_rejected(self):
        with pytest.raises(InvalidInputError):
            timeframe_start("year")


class TestSummarizeActivity:

    def test_empty(self):
        summary = summarize_activity([])
        assert summary["totalSearches"] == 0
        assert summary["averageResponseTime"] == 0
        assert summary["successRate"] == 0
        assert summary["sourceBreakdown"] == {"database": 0, "gemini": 0, "cache": 0, "error": 0}

    def test_aggregates(self):
        activities = [
            _record(1),
            _record(2, word_searched="ephemeral", response_source="database", tokens_used=None, response_time=20),
            _record(3, success=False, response_source="error", tokens_used=None, response_time=30),
        ]

        summary = summarize_activity(activities)

        assert summary["totalSearches"] == 3
        assert summary["uniqueWords"] == 2
        assert summary["totalTokensUsed"] == 10
        assert summary["averageResponseTime"] == 50
        assert summary["successRate"] == 66.67
        assert summary["sourceBreakdown"] == {"database": 1, "gemini": 1, "cache": 0, "error": 1}
        assert summary["notes"] == [DOUBLE_COUNT_NOTE]

    def test_unknown_source_counted_as_error(self):
        summary = summarize_activity([_record(1, response_source="mystery")])
        assert summary["sourceBreakdown"]["error"] == 1


class TestSummarizeUserStats:

    def test_aggregates(self):
        activities = [
            _record(1, word_searched="Lucid"),
            _record(2, word_searched="lucid"),
            _record(3, activity_type="audio_generation", response_source="cache", tokens_used=None, response_time=7),
        ]

        stats = summarize_user_stats(activities)

        assert stats["totalSearches"] == 2
        assert stats["totalAudioGenerations"] == 1
        assert stats["uniqueWordsSearched"] == 1
        assert stats["totalTokensUsed"] == 20
        assert stats["averageResponseTime"] == 69
        assert stats["successRate"] == 100.0
        assert stats["sourceBreakdown"]["cache"] == 1
        assert [a["id"] for a in stats["recentActivity"]] == ["id1", "id2", "id3"]

    def test_recent_activity_capped(self):
        stats = summarize_user_stats([_record(n) for n in range(30)])
        assert len(stats["recentActivity"]) == 20
        assert stats["recentActivity"][0]["id"] == "id0"
