"""In-memory SQLite database shared by repository and API tests."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from peakflow.application.services import ChangeFeed
from peakflow.domain.entities import ChangeEvent
from peakflow.infrastructure.database import Base


class RecordingChangeFeed(ChangeFeed):
    """Change feed that also keeps every broadcast event for inspection."""

    def __init__(self):
        super().__init__()
        self.published: list[ChangeEvent] = []

    async def broadcast(self, event: ChangeEvent) -> None:
        self.published.append(event)
        await super().broadcast(event)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def change_feed():
    feed = RecordingChangeFeed()
    yield feed
    await feed.shutdown()
