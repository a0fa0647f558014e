"""SQLAlchemy repositories against an in-memory SQLite database."""

from datetime import datetime, timedelta, timezone

import pytest

from peakflow.domain.entities import Article, ChangeType, Comment, NewsletterSubscriber, Role, UserRole
from peakflow.domain.exceptions import DuplicateEntityError
from peakflow.infrastructure.database import session_scope
from peakflow.infrastructure.database.repositories import (
    SessionScopedUserRoleRepository,
    SQLAlchemyArticleRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemySubscriberRepository,
    SQLAlchemyUserRoleRepository,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _article(title: str, day: int, **fields) -> Article:
    return Article(title=title, created_at=T0 + timedelta(days=day), **fields)


@pytest.fixture
def unit_of_work(session_factory, change_feed):
    def _scope():
        return session_scope(change_feed=change_feed, factory=session_factory)

    return _scope


async def _seed_articles(unit_of_work, *articles: Article) -> None:
    async with unit_of_work() as session:
        repo = SQLAlchemyArticleRepository(session)
        for article in articles:
            await repo.create(article)


# ── Articles ──


@pytest.mark.asyncio
async def test_list_published_filters_and_orders(unit_of_work):
    await _seed_articles(
        unit_of_work,
        _article("Lisbon Slow Mornings", 1, category="Travel", published=True),
        _article("Kyoto in Autumn", 3, category="travel", published=True),
        _article("Draft Trip", 4, category="travel", published=False),
        _article("Breathwork", 2, category="wellness", published=True, author="Morgan"),
    )

    async with unit_of_work() as session:
        repo = SQLAlchemyArticleRepository(session)
        travel = await repo.list_published(category="TRAVEL")
        limited = await repo.list_published(limit=1)
        searched = await repo.list_published(search="morgan")

    assert [a.title for a in travel] == ["Kyoto in Autumn", "Lisbon Slow Mornings"]
    assert [a.title for a in limited] == ["Kyoto in Autumn"]
    assert [a.title for a in searched] == ["Breathwork"]


@pytest.mark.asyncio
async def test_category_filter_treats_wildcards_literally(unit_of_work):
    await _seed_articles(unit_of_work, _article("A", 1, category="travel", published=True))

    async with unit_of_work() as session:
        assert await SQLAlchemyArticleRepository(session).list_published(category="%") == []


@pytest.mark.asyncio
async def test_get_published_hides_drafts(unit_of_work):
    draft = _article("Draft", 1)
    await _seed_articles(unit_of_work, draft)

    async with unit_of_work() as session:
        repo = SQLAlchemyArticleRepository(session)
        assert await repo.get_published(draft.id) is None
        assert (await repo.get_by_id(draft.id)).title == "Draft"


@pytest.mark.asyncio
async def test_clear_featured_emits_updates(unit_of_work, change_feed):
    featured = _article("Hero", 1, published=True, featured=True, featured_rank=0)
    await _seed_articles(unit_of_work, featured, _article("Plain", 2, published=True))
    change_feed.published.clear()

    async with unit_of_work() as session:
        repo = SQLAlchemyArticleRepository(session)
        await repo.clear_featured()
        assert await repo.list_featured() == []

    assert [(e.event, e.record["id"], e.record["featured"]) for e in change_feed.published] == [
        (ChangeType.UPDATE, featured.id, False)
    ]


# ── Change dispatch ──


@pytest.mark.asyncio
async def test_events_publish_only_after_commit(unit_of_work, change_feed):
    async with unit_of_work() as session:
        await SQLAlchemyArticleRepository(session).create(_article("New", 1))
        assert change_feed.published == []

    [event] = change_feed.published
    assert event.table == "articles"
    assert event.event == ChangeType.INSERT
    assert event.record["title"] == "New"


@pytest.mark.asyncio
async def test_rollback_discards_events(unit_of_work, change_feed):
    article = _article("Doomed", 1)
    with pytest.raises(RuntimeError):
        async with unit_of_work() as session:
            await SQLAlchemyArticleRepository(session).create(article)
            raise RuntimeError("abort")

    assert change_feed.published == []
    async with unit_of_work() as session:
        assert await SQLAlchemyArticleRepository(session).get_by_id(article.id) is None


# ── Comments ──


@pytest.mark.asyncio
async def test_comment_writes_are_scoped_to_owner(unit_of_work):
    article = _article("Post", 1, published=True)
    await _seed_articles(unit_of_work, article)
    comment = Comment(article_id=article.id, user_id="alice", content="Hi", author_name="alice")

    async with unit_of_work() as session:
        repo = SQLAlchemyCommentRepository(session)
        await repo.create(comment)
        assert await repo.update_owned(comment.id, "bob", "Hijacked") is None
        assert await repo.delete_owned(comment.id, "bob") is False
        updated = await repo.update_owned(comment.id, "alice", "Edited")

    assert updated.content == "Edited"
    async with unit_of_work() as session:
        repo = SQLAlchemyCommentRepository(session)
        assert await repo.delete_owned(comment.id, "alice") is True
        assert await repo.list_for_article(article.id) == []


@pytest.mark.asyncio
async def test_comment_events_carry_article_id(unit_of_work, change_feed):
    article = _article("Post", 1, published=True)
    await _seed_articles(unit_of_work, article)
    subscription = change_feed.open("comments", {"article_id": article.id})

    async with unit_of_work() as session:
        await SQLAlchemyCommentRepository(session).create(
            Comment(article_id=article.id, user_id="alice", content="Hi", author_name="alice")
        )

    event = await anext(subscription.events())
    assert event.record["content"] == "Hi"
    subscription.close()


@pytest.mark.asyncio
async def test_deleting_article_reports_its_comments_deleted(unit_of_work, change_feed):
    article = _article("Post", 1, published=True)
    await _seed_articles(unit_of_work, article)
    comment = Comment(article_id=article.id, user_id="alice", content="Hi", author_name="alice")
    async with unit_of_work() as session:
        await SQLAlchemyCommentRepository(session).create(comment)
    subscription = change_feed.open("comments", {"article_id": article.id})

    async with unit_of_work() as session:
        assert await SQLAlchemyArticleRepository(session).delete(article.id) is True

    event = await anext(subscription.events())
    assert event.event == ChangeType.DELETE
    assert event.record["id"] == comment.id
    assert [(e.table, e.event) for e in change_feed.published[-2:]] == [
        ("comments", ChangeType.DELETE),
        ("articles", ChangeType.DELETE),
    ]
    async with unit_of_work() as session:
        assert await SQLAlchemyCommentRepository(session).list_for_article(article.id) == []
    subscription.close()


# ── Subscribers ──


@pytest.mark.asyncio
async def test_duplicate_email_raises_duplicate_error(unit_of_work, change_feed):
    async with unit_of_work() as session:
        await SQLAlchemySubscriberRepository(session).create(NewsletterSubscriber(email="a@example.com"))
    change_feed.published.clear()

    async with unit_of_work() as session:
        with pytest.raises(DuplicateEntityError):
            await SQLAlchemySubscriberRepository(session).create(NewsletterSubscriber(email="a@example.com"))

    assert change_feed.published == []
    async with unit_of_work() as session:
        assert len(await SQLAlchemySubscriberRepository(session).list_all()) == 1


# ── User roles ──


@pytest.mark.asyncio
async def test_set_role_round_trips_enum(unit_of_work, session_factory, change_feed):
    async with unit_of_work() as session:
        await SQLAlchemyUserRoleRepository(session).create(UserRole(user_id="u1", email="u1@example.com"))

    async with unit_of_work() as session:
        updated = await SQLAlchemyUserRoleRepository(session).set_role("u1", Role.ADMIN)
        assert await SQLAlchemyUserRoleRepository(session).set_role("ghost", Role.ADMIN) is None

    assert updated.is_admin
    scoped = SessionScopedUserRoleRepository(
        lambda: session_scope(change_feed=change_feed, factory=session_factory)
    )
    assert (await scoped.get_by_user_id("u1")).role == Role.ADMIN
