"""Unit tests for live queries: fetch, subscribe, re-fetch on change."""

import asyncio

import pytest

from peakflow.application.services import ArticleService, ChangeFeed, LiveArticleList
from peakflow.domain.entities import ChangeEvent, ChangeType


async def _settled(snapshots):
    """Read snapshots until one is no longer loading."""
    while True:
        state = await asyncio.wait_for(snapshots.__anext__(), timeout=1)
        if not state.loading:
            return state


@pytest.fixture
def feed() -> ChangeFeed:
    return ChangeFeed()


@pytest.fixture
def live(article_repo, feed, make_scope) -> LiveArticleList:
    return LiveArticleList(make_scope(ArticleService(article_repo)), feed, category="travel")


@pytest.mark.asyncio
async def test_initial_fetch_populates_state(live, article_repo):
    article_repo.add(title="Lisbon", category="travel", published=True)
    article_repo.add(title="Yoga", category="wellness", published=True)

    async with live:
        assert live.loading is False
        assert live.error is None
        assert [a.title for a in live.articles] == ["Lisbon"]


@pytest.mark.asyncio
async def test_change_notification_triggers_full_refetch(live, article_repo, feed):
    async with live:
        assert live.articles == ()
        snapshots = live.snapshots()
        await snapshots.__anext__()  # current state

        article = article_repo.add(title="Porto", category="travel", published=True)
        await feed.broadcast(ChangeEvent("articles", ChangeType.INSERT, {"id": article.id}))
        state = await _settled(snapshots)

        assert [a.title for a in state.items] == ["Porto"]
        fetches = [name for name, _ in article_repo.calls if name == "list_published"]
        assert len(fetches) == 2


@pytest.mark.asyncio
async def test_fetch_failure_sets_error_and_empties_list(live, article_repo):
    article_repo.fail_with = RuntimeError("store unavailable")

    async with live:
        assert live.loading is False
        assert live.error == "store unavailable"
        assert live.articles == ()


@pytest.mark.asyncio
async def test_close_unsubscribes_and_ends_snapshots(live, feed):
    await live.start()
    assert feed.subscriber_count == 1
    snapshots = live.snapshots()
    await snapshots.__anext__()

    await live.close()

    assert feed.subscriber_count == 0
    assert [state async for state in snapshots] == []


@pytest.mark.asyncio
async def test_set_category_reopens_subscription_and_refetches(live, article_repo, feed):
    article_repo.add(title="Lisbon", category="travel", published=True)
    article_repo.add(title="Breathwork", category="wellness", published=True)

    async with live:
        first_subscription = live._subscription
        snapshots = live.snapshots()
        await snapshots.__anext__()

        await live.set_category("wellness")

        assert live.category == "wellness"
        assert [a.title for a in live.articles] == ["Breathwork"]
        assert live._subscription is not first_subscription
        assert first_subscription.closed
        assert feed.subscriber_count == 1
        state = await _settled(snapshots)
        assert [a.title for a in state.items] == ["Breathwork"]


def test_category_is_read_only(live):
    with pytest.raises(AttributeError):
        live.category = "wellness"
