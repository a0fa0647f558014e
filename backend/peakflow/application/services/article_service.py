"""Application service (use case) for Article operations."""

import logging

from peakflow.application.interfaces import ArticleRepository
from peakflow.application.schemas import ArticleCreate, ArticleUpdate
from peakflow.application.services.display import ArticleDisplay, to_display
from peakflow.domain.entities import Article
from peakflow.domain.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

ANY_CATEGORY = "all"


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ArticleService:
    """Orchestrates article reads for the public site and edits for admins.

    Public reads only ever see published articles; the filter is applied in
    every query, not after the fact.
    """

    def __init__(self, repository: ArticleRepository, related_limit: int = 3):
        self._repository = repository
        self._related_limit = related_limit

    # ── Public reads ─────────────────────────────────────────────────

    async def list_published(self, category: str | None = None) -> list[ArticleDisplay]:
        category = _blank_to_none(category)
        articles = await self._repository.list_published(category=category)
        return [to_display(a) for a in articles]

    async def get_published(self, article_id: str) -> ArticleDisplay:
        article = await self._repository.get_published(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return to_display(article)

    async def related(
        self,
        current_id: str | None,
        category: str | None,
        limit: int | None = None,
    ) -> list[ArticleDisplay]:
        """Other published articles in the same category, newest first.

        Falls back to the newest published articles of any category only
        when the category query found nothing at all.
        """
        if not current_id or not category:
            return []
        if limit is None:
            limit = self._related_limit

        articles = await self._repository.list_published(
            category=category, exclude_id=current_id, limit=limit
        )
        if not articles:
            logger.debug("No related articles in '%s'; falling back to latest", category)
            articles = await self._repository.list_published(
                exclude_id=current_id, limit=limit
            )
        return [to_display(a) for a in articles]

    async def search(self, query: str | None = None, category: str | None = None) -> list[ArticleDisplay]:
        query = _blank_to_none(query)
        category = _blank_to_none(category)
        if category and category.lower() == ANY_CATEGORY:
            category = None
        articles = await self._repository.list_published(category=category, search=query)
        return [to_display(a) for a in articles]

    async def featured(self) -> list[ArticleDisplay]:
        return [to_display(a) for a in await self._repository.list_featured()]

    # ── Admin ────────────────────────────────────────────────────────

    async def get_article(self, article_id: str) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_all(self) -> list[Article]:
        return await self._repository.list_all()

    async def create_article(self, data: ArticleCreate) -> Article:
        title = data.title.strip()
        if not title:
            raise ValidationError("title", "Please enter a title for the article.")

        article = Article(
            title=title,
            excerpt=_blank_to_none(data.excerpt),
            content=_blank_to_none(data.content),
            category=_blank_to_none(data.category) or "general",
            image_url=_blank_to_none(data.image_url),
            author=_blank_to_none(data.author) or "Anonymous",
            read_time=_blank_to_none(data.read_time) or "5 min read",
            published=data.published,
        )
        created = await self._repository.create(article)
        logger.info("Created article %s (published=%s)", created.id, created.published)
        return created

    async def update_article(self, article_id: str, data: ArticleUpdate) -> Article:
        article = await self.get_article(article_id)
        changes = data.model_dump(exclude_unset=True)

        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise ValidationError("title", "Please enter a title for the article.")
            changes["title"] = title
        for key in ("excerpt", "content", "image_url"):
            if key in changes:
                changes[key] = _blank_to_none(changes[key])
        if "category" in changes:
            changes["category"] = _blank_to_none(changes["category"]) or "general"
        if "author" in changes:
            changes["author"] = _blank_to_none(changes["author"]) or "Anonymous"
        if "read_time" in changes:
            changes["read_time"] = _blank_to_none(changes["read_time"]) or "5 min read"
        if changes.get("published") is None:
            changes.pop("published", None)

        article.update(**changes)
        return await self._repository.update(article)

    async def toggle_published(self, article_id: str) -> Article:
        article = await self.get_article(article_id)
        article.toggle_published()
        updated = await self._repository.update(article)
        logger.info("Article %s published=%s", article_id, updated.published)
        return updated

    async def set_featured(self, article_ids: list[str]) -> list[ArticleDisplay]:
        """Replace the featured selection with ``article_ids`` in that order.

        Every id must be a published article; the previous selection is
        cleared first.
        """
        selected: list[Article] = []
        for article_id in dict.fromkeys(article_ids):
            article = await self._repository.get_published(article_id)
            if article is None:
                raise EntityNotFoundError("Article", article_id)
            selected.append(article)

        await self._repository.clear_featured()
        for rank, article in enumerate(selected):
            article.update(featured=True, featured_rank=rank)
            await self._repository.update(article)
        return await self.featured()

    async def delete_article(self, article_id: str) -> bool:
        exists = await self._repository.get_by_id(article_id)
        if exists is None:
            raise EntityNotFoundError("Article", article_id)
        return await self._repository.delete(article_id)
