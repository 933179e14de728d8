"""
Database Module

Async SQLAlchemy engine and session factory backing the word and activity
collections. When DATABASE_URL is empty, persistence is disabled: the
engine and session factory are None and the stores degrade to no-ops.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from config.settings import settings
from utils.logging import get_logger

logger = get_logger(__name__)


def normalize_database_url(url: str) -> str:
    """Ensure the URL uses an async driver."""
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        # asyncpg expects 'ssl' not 'sslmode' in query
        url = url.replace("sslmode=require", "ssl=require")
        url = url.replace("sslmode=verify-full", "ssl=verify-full")
    elif url.startswith("sqlite://"):
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def create_engine_from_url(url: Optional[str]) -> Optional[AsyncEngine]:
    if not url:
        logger.warning("DATABASE_URL not configured - word and activity persistence disabled")
        return None

    url = normalize_database_url(url)
    kwargs = {"echo": False, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs["pool_recycle"] = 300
    return create_async_engine(url, **kwargs)


engine = create_engine_from_url(settings.DATABASE_URL)

SessionLocal = (
    async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    if engine is not None
    else None
)

Base = declarative_base()


async def init_models(target: Optional[AsyncEngine] = None) -> None:
    """Create all tables on the given (or default) engine."""
    target = target or engine
    if target is None:
        return
    # Registers the ORM classes on Base.metadata
    from core import models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")


async def check_database_health() -> bool:
    """Run a trivial query to confirm the database answers."""
    if engine is None:
        return False
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
