"""Shared in-memory fakes implementing the repository and provider ports."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import TypeVar

import pytest

from peakflow.application.interfaces import (
    ArticleRepository,
    AuthProvider,
    CommentRepository,
    SubscriberRepository,
    UserRoleRepository,
)
from peakflow.domain.entities import (
    Article,
    AuthSession,
    AuthUser,
    Comment,
    NewsletterSubscriber,
    Role,
    UserRole,
)
from peakflow.domain.exceptions import AuthProviderError, DuplicateEntityError

S = TypeVar("S")

BASE_TIME = datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)


def at(days: int) -> datetime:
    """A timestamp ``days`` after BASE_TIME, for deterministic ordering."""
    return BASE_TIME + timedelta(days=days)


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository. ``calls`` records every query issued."""

    def __init__(self):
        self._articles: dict[str, Article] = {}
        self.calls: list[tuple[str, dict]] = []
        self.fail_with: Exception | None = None

    def add(self, **fields) -> Article:
        article = Article(**fields)
        self._articles[article.id] = article
        return article

    def _check(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _newest_first(articles) -> list[Article]:
        return sorted(articles, key=lambda a: a.created_at, reverse=True)

    async def get_by_id(self, article_id: str) -> Article | None:
        self._check("get_by_id", article_id=article_id)
        return self._articles.get(article_id)

    async def get_published(self, article_id: str) -> Article | None:
        self._check("get_published", article_id=article_id)
        article = self._articles.get(article_id)
        return article if article is not None and article.published else None

    async def list_published(self, *, category=None, exclude_id=None, search=None, limit=None) -> list[Article]:
        self._check("list_published", category=category, exclude_id=exclude_id, search=search, limit=limit)
        rows = [a for a in self._articles.values() if a.published]
        if category:
            rows = [a for a in rows if a.category.lower() == category.lower()]
        if exclude_id:
            rows = [a for a in rows if a.id != exclude_id]
        if search:
            needle = search.lower()
            rows = [
                a for a in rows
                if needle in a.title.lower()
                or needle in (a.excerpt or "").lower()
                or needle in a.author.lower()
            ]
        rows = self._newest_first(rows)
        return rows[:limit] if limit is not None else rows

    async def list_all(self) -> list[Article]:
        self._check("list_all")
        return self._newest_first(self._articles.values())

    async def list_featured(self) -> list[Article]:
        self._check("list_featured")
        rows = [a for a in self._articles.values() if a.published and a.featured]
        return sorted(rows, key=lambda a: (a.featured_rank is None, a.featured_rank or 0))

    async def clear_featured(self) -> None:
        self._check("clear_featured")
        for article in self._articles.values():
            article.featured = False
            article.featured_rank = None

    async def create(self, article: Article) -> Article:
        self._check("create")
        self._articles[article.id] = article
        return article

    async def update(self, article: Article) -> Article:
        self._check("update", article_id=article.id)
        if article.id not in self._articles:
            raise ValueError(f"Article {article.id} not found")
        self._articles[article.id] = article
        return article

    async def delete(self, article_id: str) -> bool:
        self._check("delete", article_id=article_id)
        return self._articles.pop(article_id, None) is not None


class FakeCommentRepository(CommentRepository):

    def __init__(self):
        self._comments: dict[str, Comment] = {}
        self.calls: list[str] = []
        self.fail_with: Exception | None = None

    def add(self, **fields) -> Comment:
        comment = Comment(**fields)
        self._comments[comment.id] = comment
        return comment

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    async def get_by_id(self, comment_id: str) -> Comment | None:
        self._check("get_by_id")
        return self._comments.get(comment_id)

    async def list_for_article(self, article_id: str) -> list[Comment]:
        self._check("list_for_article")
        rows = [c for c in self._comments.values() if c.article_id == article_id]
        return sorted(rows, key=lambda c: c.created_at, reverse=True)

    async def create(self, comment: Comment) -> Comment:
        self._check("create")
        self._comments[comment.id] = comment
        return comment

    async def update_owned(self, comment_id: str, user_id: str, content: str) -> Comment | None:
        self._check("update_owned")
        comment = self._comments.get(comment_id)
        if comment is None or comment.user_id != user_id:
            return None
        comment.edit(content)
        return comment

    async def delete_owned(self, comment_id: str, user_id: str) -> bool:
        self._check("delete_owned")
        comment = self._comments.get(comment_id)
        if comment is None or comment.user_id != user_id:
            return False
        del self._comments[comment_id]
        return True


class FakeSubscriberRepository(SubscriberRepository):

    def __init__(self):
        self._subscribers: dict[str, NewsletterSubscriber] = {}
        self.creates = 0

    def add(self, **fields) -> NewsletterSubscriber:
        subscriber = NewsletterSubscriber(**fields)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    async def get_by_id(self, subscriber_id: str) -> NewsletterSubscriber | None:
        return self._subscribers.get(subscriber_id)

    async def get_by_email(self, email: str) -> NewsletterSubscriber | None:
        return next((s for s in self._subscribers.values() if s.email == email), None)

    async def list_all(self) -> list[NewsletterSubscriber]:
        return sorted(self._subscribers.values(), key=lambda s: s.subscribed_at, reverse=True)

    async def create(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        self.creates += 1
        if any(s.email == subscriber.email for s in self._subscribers.values()):
            raise DuplicateEntityError("NewsletterSubscriber", "email", subscriber.email)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    async def update(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    async def delete(self, subscriber_id: str) -> bool:
        return self._subscribers.pop(subscriber_id, None) is not None


class FakeUserRoleRepository(UserRoleRepository):

    def __init__(self):
        self._roles: dict[str, UserRole] = {}
        self.lookups = 0

    def add(self, user_id: str, role: Role = Role.USER, **fields) -> UserRole:
        user_role = UserRole(user_id=user_id, role=role, **fields)
        self._roles[user_id] = user_role
        return user_role

    async def get_by_user_id(self, user_id: str) -> UserRole | None:
        self.lookups += 1
        return self._roles.get(user_id)

    async def list_all(self) -> list[UserRole]:
        return sorted(self._roles.values(), key=lambda r: r.created_at, reverse=True)

    async def create(self, user_role: UserRole) -> UserRole:
        self._roles[user_role.user_id] = user_role
        return user_role

    async def set_role(self, user_id: str, role: Role) -> UserRole | None:
        user_role = self._roles.get(user_id)
        if user_role is None:
            return None
        user_role.role = role
        return user_role


class FakeAuthProvider(AuthProvider):
    """Maps known tokens to users; anything else is rejected."""

    def __init__(self, users: dict[str, AuthUser] | None = None):
        self.users = dict(users or {})
        self.signed_out: list[str] = []
        self.unavailable = False

    async def get_session(self, access_token: str) -> AuthSession | None:
        if self.unavailable:
            raise AuthProviderError(503, "unavailable")
        user = self.users.get(access_token)
        return AuthSession(access_token=access_token, user=user) if user else None

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


def scope_of(service: S) -> Callable[[], AbstractAsyncContextManager[S]]:
    """Wrap a ready-made service as a live-query service scope."""

    @asynccontextmanager
    async def _scope() -> AsyncIterator[S]:
        yield service

    return _scope


ALICE = AuthUser(id="user-alice", email="alice@example.com")
BOB = AuthUser(id="user-bob", email="bob@example.com")


@pytest.fixture
def article_repo() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def comment_repo() -> FakeCommentRepository:
    return FakeCommentRepository()


@pytest.fixture
def subscriber_repo() -> FakeSubscriberRepository:
    return FakeSubscriberRepository()


@pytest.fixture
def role_repo() -> FakeUserRoleRepository:
    return FakeUserRoleRepository()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider({"alice-token": ALICE, "bob-token": BOB})


@pytest.fixture
def alice() -> AuthUser:
    return ALICE


@pytest.fixture
def bob() -> AuthUser:
    return BOB


@pytest.fixture
def make_scope():
    return scope_of


@pytest.fixture
def days():
    return at
