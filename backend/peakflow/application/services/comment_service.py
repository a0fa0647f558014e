"""Application service for article comments."""

import logging

from peakflow.application.interfaces import ArticleRepository, CommentRepository
from peakflow.domain.entities import AuthUser, Comment
from peakflow.domain.exceptions import (
    AuthenticationRequiredError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class CommentService:
    """Reads and writes comments.

    Ownership is checked here against the acting user even though clients
    only offer edit/delete to the owner.
    """

    def __init__(self, repository: CommentRepository, articles: ArticleRepository):
        self._repository = repository
        self._articles = articles

    async def list_for_article(self, article_id: str) -> list[Comment]:
        return await self._repository.list_for_article(article_id)

    async def add_comment(self, article_id: str, user: AuthUser | None, content: str) -> Comment:
        if user is None:
            raise AuthenticationRequiredError("You must be logged in to comment")
        content = content.strip()
        if not content:
            raise ValidationError("content", "Comment cannot be empty")
        if await self._articles.get_published(article_id) is None:
            raise EntityNotFoundError("Article", article_id)

        comment = Comment(
            article_id=article_id,
            user_id=user.id,
            content=content,
            author_name=user.display_name,
        )
        return await self._repository.create(comment)

    async def update_comment(self, comment_id: str, user: AuthUser | None, content: str) -> Comment:
        if user is None:
            raise AuthenticationRequiredError()
        content = content.strip()
        if not content:
            raise ValidationError("content", "Comment cannot be empty")

        updated = await self._repository.update_owned(comment_id, user.id, content)
        if updated is None:
            await self._raise_missing_or_denied(comment_id, user)
        return updated

    async def delete_comment(self, comment_id: str, user: AuthUser | None) -> bool:
        if user is None:
            raise AuthenticationRequiredError()
        if not await self._repository.delete_owned(comment_id, user.id):
            await self._raise_missing_or_denied(comment_id, user)
        return True

    async def _raise_missing_or_denied(self, comment_id: str, user: AuthUser) -> None:
        existing = await self._repository.get_by_id(comment_id)
        if existing is None:
            raise EntityNotFoundError("Comment", comment_id)
        logger.warning("User %s tried to modify comment %s owned by %s", user.id, comment_id, existing.user_id)
        raise PermissionDeniedError("Only the author may change this comment")
