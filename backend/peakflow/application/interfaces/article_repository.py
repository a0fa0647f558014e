"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from peakflow.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article by its ID, published or not."""
        ...

    @abstractmethod
    async def get_published(self, article_id: str) -> Article | None:
        """Retrieve a single article only if it is published."""
        ...

    @abstractmethod
    async def list_published(
        self,
        *,
        category: str | None = None,
        exclude_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[Article]:
        """Published articles, newest first.

        ``category`` is matched case-insensitively; ``search`` matches title,
        excerpt, or author case-insensitively.
        """
        ...

    @abstractmethod
    async def list_all(self) -> list[Article]:
        """Every article including drafts, newest first."""
        ...

    @abstractmethod
    async def list_featured(self) -> list[Article]:
        """Published featured articles in display order."""
        ...

    @abstractmethod
    async def clear_featured(self) -> None:
        """Unset the featured flag on every article."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Update an existing article."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...
