"""
Analytics Router

Dashboard figures computed from the activity log.

Endpoints:
    GET /api/analytics - Site-wide word search summary for a timeframe
    GET /api/user-stats - Summary of one user's recent activity
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from config.constants import ANALYTICS_SCAN_LIMIT, DEFAULT_ACTIVITY_LIMIT
from core.dependencies import get_activity_logger
from core.schemas import ActivityType
from services.activity.analytics import (
    summarize_activity,
    summarize_user_stats,
    timeframe_start,
)
from services.activity.tracker import ActivityLogger
from utils.exceptions import PersistenceError
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Analytics"])


@router.get("/analytics", summary="Word search analytics")
async def get_analytics(
    timeframe: str = Query("day", description="day, week or month"),
    activity: ActivityLogger = Depends(get_activity_logger)
):
    """
    Aggregate word searches over the last day, week or month (30 days).
    """
    since = timeframe_start(timeframe)

    try:
        activities = await activity.list_since(
            since,
            activity_type=ActivityType.WORD_SEARCH.value,
            limit=ANALYTICS_SCAN_LIMIT
        )
    except PersistenceError as e:
        logger.error(f"Error fetching analytics: {e.message}")
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to fetch analytics"})

    return {"success": True, "analytics": summarize_activity(activities)}


@router.get("/user-stats", summary="Per-user statistics")
async def get_user_stats(
    user_id: Optional[str] = Query(None),
    activity: ActivityLogger = Depends(get_activity_logger)
):
    """Summarize a user's last 100 activity events."""
    if not user_id:
        return JSONResponse(status_code=400, content={"success": False, "error": "User ID is required"})

    try:
        activities = await activity.list_activities(user_id=user_id, limit=DEFAULT_ACTIVITY_LIMIT)
    except PersistenceError as e:
        logger.error(f"Error fetching user stats: {e.message}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to fetch user statistics"}
        )

    return {"success": True, "stats": summarize_user_stats(activities)}
