"""Concrete repository implementation for comments backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from peakflow.application.interfaces import CommentRepository
from peakflow.domain.entities import ChangeType, Comment
from peakflow.infrastructure.database.change_tracking import record_change
from peakflow.infrastructure.database.models import CommentModel


class SQLAlchemyCommentRepository(CommentRepository):
    """Implements the CommentRepository port; writes are scoped to the owner."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            article_id=model.article_id,
            user_id=model.user_id,
            content=model.content,
            author_name=model.author_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _get_owned(self, comment_id: str, user_id: str) -> CommentModel | None:
        stmt = select(CommentModel).where(
            CommentModel.id == comment_id,
            CommentModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, comment_id: str) -> Comment | None:
        result = await self._session.get(CommentModel, comment_id)
        return self._to_entity(result) if result else None

    async def list_for_article(self, article_id: str) -> list[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.article_id == article_id)
            .order_by(CommentModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            id=comment.id,
            article_id=comment.article_id,
            user_id=comment.user_id,
            content=comment.content,
            author_name=comment.author_name,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        record_change(self._session, model, ChangeType.INSERT)
        return self._to_entity(model)

    async def update_owned(self, comment_id: str, user_id: str, content: str) -> Comment | None:
        model = await self._get_owned(comment_id, user_id)
        if model is None:
            return None
        model.content = content
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()
        record_change(self._session, model, ChangeType.UPDATE)
        return self._to_entity(model)

    async def delete_owned(self, comment_id: str, user_id: str) -> bool:
        model = await self._get_owned(comment_id, user_id)
        if model is None:
            return False
        record_change(self._session, model, ChangeType.DELETE)
        await self._session.delete(model)
        await self._session.flush()
        return True
