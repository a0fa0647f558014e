"""Concrete repository implementation backed by SQLAlchemy."""

from sqlalchemy import Select, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from peakflow.application.interfaces import ArticleRepository
from peakflow.domain.entities import Article, ChangeType
from peakflow.infrastructure.database.change_tracking import record_change
from peakflow.infrastructure.database.models import ArticleModel, CommentModel


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            category=model.category,
            excerpt=model.excerpt,
            content=model.content,
            author=model.author,
            image_url=model.image_url,
            read_time=model.read_time,
            published=model.published,
            featured=model.featured,
            featured_rank=model.featured_rank,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            id=entity.id,
            title=entity.title,
            category=entity.category,
            excerpt=entity.excerpt,
            content=entity.content,
            author=entity.author,
            image_url=entity.image_url,
            read_time=entity.read_time,
            published=entity.published,
            featured=entity.featured,
            featured_rank=entity.featured_rank,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _published() -> Select[tuple[ArticleModel]]:
        return select(ArticleModel).where(ArticleModel.published.is_(True))

    async def _all(self, stmt: Select[tuple[ArticleModel]]) -> list[Article]:
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, article_id: str) -> Article | None:
        result = await self._session.get(ArticleModel, article_id)
        return self._to_entity(result) if result else None

    async def get_published(self, article_id: str) -> Article | None:
        stmt = self._published().where(ArticleModel.id == article_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_published(
        self,
        *,
        category: str | None = None,
        exclude_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[Article]:
        stmt = self._published()
        if category:
            stmt = stmt.where(ArticleModel.category.ilike(_escape_like(category), escape="\\"))
        if exclude_id:
            stmt = stmt.where(ArticleModel.id != exclude_id)
        if search:
            pattern = f"%{_escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    ArticleModel.title.ilike(pattern, escape="\\"),
                    ArticleModel.excerpt.ilike(pattern, escape="\\"),
                    ArticleModel.author.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(ArticleModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._all(stmt)

    async def list_all(self) -> list[Article]:
        return await self._all(select(ArticleModel).order_by(ArticleModel.created_at.desc()))

    async def list_featured(self) -> list[Article]:
        stmt = (
            self._published()
            .where(ArticleModel.featured.is_(True))
            .order_by(ArticleModel.featured_rank.asc(), ArticleModel.created_at.desc())
        )
        return await self._all(stmt)

    async def clear_featured(self) -> None:
        result = await self._session.execute(
            select(ArticleModel).where(ArticleModel.featured.is_(True))
        )
        previously_featured = result.scalars().all()
        await self._session.execute(
            update(ArticleModel)
            .where(ArticleModel.featured.is_(True))
            .values(featured=False, featured_rank=None)
        )
        for model in previously_featured:
            record_change(self._session, model, ChangeType.UPDATE)

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        self._session.add(model)
        await self._session.flush()
        record_change(self._session, model, ChangeType.INSERT)
        return self._to_entity(model)

    async def update(self, article: Article) -> Article:
        model = await self._session.get(ArticleModel, article.id)
        if model is None:
            raise ValueError(f"Article {article.id} not found in database")
        model.title = article.title
        model.category = article.category
        model.excerpt = article.excerpt
        model.content = article.content
        model.author = article.author
        model.image_url = article.image_url
        model.read_time = article.read_time
        model.published = article.published
        model.featured = article.featured
        model.featured_rank = article.featured_rank
        model.updated_at = article.updated_at
        await self._session.flush()
        record_change(self._session, model, ChangeType.UPDATE)
        return self._to_entity(model)

    async def delete(self, article_id: str) -> bool:
        model = await self._session.get(ArticleModel, article_id)
        if model is None:
            return False
        # Comments go with their article; each one is reported as its own delete.
        comments = await self._session.execute(
            select(CommentModel).where(CommentModel.article_id == article_id)
        )
        for comment in comments.scalars().all():
            record_change(self._session, comment, ChangeType.DELETE)
        await self._session.execute(delete(CommentModel).where(CommentModel.article_id == article_id))
        record_change(self._session, model, ChangeType.DELETE)
        await self._session.delete(model)
        await self._session.flush()
        return True
