"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from peakflow.config import get_settings
from peakflow.application.interfaces import AuthProvider
from peakflow.application.services import (
    ArticleService,
    AuthContext,
    CommentService,
    DashboardService,
    NewsletterService,
    SitemapService,
    UserRoleService,
)
from peakflow.domain.entities import AuthUser
from peakflow.infrastructure.auth import GoTrueAuthProvider
from peakflow.infrastructure.database.session import get_db_session, session_scope
from peakflow.infrastructure.database.repositories import (
    SessionScopedUserRoleRepository,
    SQLAlchemyArticleRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemySubscriberRepository,
    SQLAlchemyUserRoleRepository,
)
from peakflow.infrastructure.realtime import get_change_feed

__all__ = [
    "get_change_feed",
    "get_auth_provider",
    "get_auth_context",
    "require_user",
    "require_admin",
    "build_socket_auth_context",
    "article_service_scope",
    "comment_service_scope",
    "get_article_service",
    "get_comment_service",
    "get_newsletter_service",
    "get_user_role_service",
    "get_dashboard_service",
    "get_sitemap_service",
]


# ── Auth ─────────────────────────────────────────────────────────────


@lru_cache
def get_auth_provider() -> AuthProvider:
    """Process-wide auth provider sharing one HTTP connection pool."""
    settings = get_settings()
    return GoTrueAuthProvider(
        base_url=settings.auth_url,
        api_key=settings.auth_api_key,
        timeout=settings.auth_timeout_seconds,
    )


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_auth_context(
    authorization: str | None = Header(default=None),
    session: AsyncSession = Depends(get_db_session),
    provider: AuthProvider = Depends(get_auth_provider),
) -> AsyncGenerator[AuthContext, None]:
    """Per-request auth context, initialised from the bearer token."""
    context = AuthContext(provider, SQLAlchemyUserRoleRepository(session))
    await context.initialize(bearer_token(authorization))
    try:
        yield context
    finally:
        context.close()


async def require_user(context: AuthContext = Depends(get_auth_context)) -> AuthUser:
    user = context.snapshot.user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(
    user: AuthUser = Depends(require_user),
    context: AuthContext = Depends(get_auth_context),
) -> AuthUser:
    if not context.snapshot.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


async def build_socket_auth_context(access_token: str | None) -> AuthContext:
    """Auth context for a long-lived connection; role lookups open their own sessions."""
    context = AuthContext(get_auth_provider(), SessionScopedUserRoleRepository(session_scope))
    await context.initialize(access_token)
    return context


# ── Service scopes for live queries ──────────────────────────────────


@asynccontextmanager
async def article_service_scope() -> AsyncIterator[ArticleService]:
    """One unit of work yielding an ArticleService; used per live re-fetch."""
    async with session_scope() as session:
        yield ArticleService(
            SQLAlchemyArticleRepository(session),
            related_limit=get_settings().related_articles_limit,
        )


@asynccontextmanager
async def comment_service_scope() -> AsyncIterator[CommentService]:
    async with session_scope() as session:
        yield CommentService(
            SQLAlchemyCommentRepository(session),
            SQLAlchemyArticleRepository(session),
        )


# ── Request-scoped services ──────────────────────────────────────────


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    repository = SQLAlchemyArticleRepository(session)
    yield ArticleService(repository, related_limit=get_settings().related_articles_limit)


async def get_comment_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CommentService, None]:
    yield CommentService(
        SQLAlchemyCommentRepository(session),
        SQLAlchemyArticleRepository(session),
    )


async def get_newsletter_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[NewsletterService, None]:
    yield NewsletterService(SQLAlchemySubscriberRepository(session))


async def get_user_role_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserRoleService, None]:
    yield UserRoleService(SQLAlchemyUserRoleRepository(session))


async def get_dashboard_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DashboardService, None]:
    """Provides a DashboardService reading all three collections in one session."""
    yield DashboardService(
        articles=SQLAlchemyArticleRepository(session),
        subscribers=SQLAlchemySubscriberRepository(session),
        roles=SQLAlchemyUserRoleRepository(session),
    )


async def get_sitemap_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SitemapService, None]:
    yield SitemapService(SQLAlchemyArticleRepository(session), get_settings().site_base_url)