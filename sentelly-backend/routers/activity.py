"""
Activity Router

Client-side activity logging and retrieval.

Endpoints:
    POST /api/activity - Record an activity event sent by the client
    GET /api/activity - List recent activity events
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from config.constants import DEFAULT_ACTIVITY_LIMIT
from core.dependencies import get_activity_logger
from core.schemas import ActivityCreate, ActivityEvent
from services.activity.tracker import ActivityLogger
from utils.exceptions import PersistenceError
from utils.logging import get_logger
from utils.rate_limit import limit_activity
from utils.request_context import get_client_ip

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Activity"])


@router.post("/activity", summary="Record an activity event")
@limit_activity
async def log_activity(
    request: Request,
    body: ActivityCreate,
    activity: ActivityLogger = Depends(get_activity_logger)
):
    """
    Record an activity event reported by the client.

    The client IP always comes from the request headers, never the body.
    """
    event = ActivityEvent(
        **body.model_dump(),
        ip_address=get_client_ip(request),
    )
    if not event.user_agent:
        event.user_agent = request.headers.get("user-agent")

    try:
        activity_id = await activity.log(event)
    except PersistenceError as e:
        logger.error(f"Activity logging error: {e.message}")
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to log activity"})

    if not activity_id:
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to log activity"})

    return {"success": True, "id": activity_id}


@router.get("/activity", summary="List recent activity events")
async def list_activities(
    user_id: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_ACTIVITY_LIMIT),
    activity: ActivityLogger = Depends(get_activity_logger)
):
    """Most recent activity events, newest first, optionally for one user."""
    try:
        activities = await activity.list_activities(user_id=user_id, limit=limit)
    except PersistenceError as e:
        logger.error(f"Error fetching activities: {e.message}")
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to fetch activities"})

    return {
        "success": True,
        "activities": [a.model_dump(mode="json") for a in activities]
    }
