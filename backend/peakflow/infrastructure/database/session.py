"""SQLAlchemy database session and engine configuration."""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from peakflow.application.services.change_feed import ChangeFeed
from peakflow.config import get_settings
from peakflow.infrastructure.database.change_tracking import take_pending_changes
from peakflow.infrastructure.realtime import get_change_feed

logger = logging.getLogger(__name__)


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


settings = get_settings()
_async_url = _get_async_url(settings.database_url)

engine = create_async_engine(
    _async_url,
    echo=(settings.app_env == "development"),
    future=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def session_scope(
    change_feed: ChangeFeed | None = None,
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """One unit of work: commit on success, then publish its change events.

    Events recorded by repositories are dropped on rollback.
    """
    feed = change_feed or get_change_feed()
    async with (factory or async_session_factory)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            take_pending_changes(session)
            raise
        events = take_pending_changes(session)

    for event in events:
        await feed.broadcast(event)
    if events:
        logger.debug("Published %d change event(s)", len(events))


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — yields an async DB session per request."""
    async with session_scope() as session:
        yield session
