"""
Activity Tracker

Writes and reads the activity log that feeds the analytics dashboard.

Resolvers use ``record()``, which is best-effort: a failed write is logged
and dropped, never raised. The activity endpoint uses ``log()``, which
raises so the client learns its backup write did not land.

Usage:
    from services.activity.tracker import ActivityLogger

    activity = ActivityLogger(SessionLocal)
    await activity.record(ActivityEvent(...))
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker

from config.constants import (
    DEFAULT_ACTIVITY_LIMIT,
    MAX_ACTIVITY_LIMIT,
    MAX_ERROR_MESSAGE_LENGTH,
)
from core.models import ActivityDocument
from core.schemas import ActivityEvent, ActivityRecord
from utils.exceptions import PersistenceError
from utils.logging import get_logger

logger = get_logger(__name__)


def _clamp_limit(limit: Optional[int]) -> int:
    if not limit or limit <= 0:
        return DEFAULT_ACTIVITY_LIMIT
    return min(limit, MAX_ACTIVITY_LIMIT)


def build_document(event: ActivityEvent) -> ActivityDocument:
    """Map an event onto a new activity row, normalizing optional fields."""
    error_message = event.error_message or None
    if error_message and len(error_message) > MAX_ERROR_MESSAGE_LENGTH:
        error_message = error_message[:MAX_ERROR_MESSAGE_LENGTH]

    return ActivityDocument(
        user_id=event.user_id or None,
        user_email=event.user_email or None,
        activity_type=event.activity_type.value,
        word_searched=event.word_searched.lower() if event.word_searched else None,
        response_source=event.response_source.value,
        tokens_used=event.tokens_used or None,
        response_time=event.response_time,
        success=event.success,
        error_message=error_message,
        user_agent=event.user_agent or None,
        ip_address=event.ip_address or "unknown",
        session_id=event.session_id or None,
        metadata_=dict(event.metadata or {}),
    )


class ActivityLogger:
    """
    Async adapter over the activity collection.

    Disabled (no-op writes, empty reads) when no session factory is set.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self._session_factory = session_factory

    @property
    def enabled(self) -> bool:
        return self._session_factory is not None

    async def log(self, event: ActivityEvent) -> Optional[str]:
        """
        Write an activity event.

        Returns:
            str: New document id, or None when persistence is disabled

        Raises:
            PersistenceError: If the write fails
        """
        if not self.enabled:
            logger.debug(f"Activity not persisted (disabled): {event.activity_type.value}")
            return None

        document = build_document(event)
        try:
            async with self._session_factory() as session:
                session.add(document)
                await session.commit()
        except Exception as e:
            raise PersistenceError(
                f"Error logging activity: {e}",
                operation="log_activity",
                details={"activity_type": event.activity_type.value}
            ) from e

        return document.id

    async def record(self, event: ActivityEvent) -> Optional[str]:
        """
        Best-effort write. Never raises.

        Returns:
            str: New document id, or None if nothing was written
        """
        try:
            return await self.log(event)
        except Exception as e:
            logger.error(f"Failed to track activity: {e}")
            return None

    async def list_activities(
        self,
        user_id: Optional[str] = None,
        limit: Optional[int] = DEFAULT_ACTIVITY_LIMIT
    ) -> List[ActivityRecord]:
        """
        Most recent activities, newest first.

        Args:
            user_id: Restrict to one user (all users if None)
            limit: Maximum number of events

        Raises:
            PersistenceError: If the read fails
        """
        if not self.enabled:
            return []

        query = select(ActivityDocument)
        if user_id:
            query = query.where(ActivityDocument.user_id == user_id)
        query = query.order_by(ActivityDocument.created_at.desc()).limit(_clamp_limit(limit))

        return await self._fetch(query, operation="list_activities")

    async def list_since(
        self,
        since: datetime,
        activity_type: Optional[str] = None,
        limit: int = MAX_ACTIVITY_LIMIT
    ) -> List[ActivityRecord]:
        """
        Activities created at or after a point in time.

        Raises:
            PersistenceError: If the read fails
        """
        if not self.enabled:
            return []

        query = select(ActivityDocument).where(ActivityDocument.created_at >= since)
        if activity_type:
            query = query.where(ActivityDocument.activity_type == activity_type)
        query = query.order_by(ActivityDocument.created_at.desc()).limit(limit)

        return await self._fetch(query, operation="list_since")

    async def _fetch(self, query, operation: str) -> List[ActivityRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
        except Exception as e:
            raise PersistenceError(f"Error fetching activities: {e}", operation=operation) from e

        return [ActivityRecord.model_validate(row) for row in rows]
