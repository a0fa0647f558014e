"""Port for comment persistence."""

from abc import ABC, abstractmethod

from peakflow.domain.entities import Comment


class CommentRepository(ABC):

    @abstractmethod
    async def get_by_id(self, comment_id: str) -> Comment | None:
        ...

    @abstractmethod
    async def list_for_article(self, article_id: str) -> list[Comment]:
        """Comments on one article, newest first."""
        ...

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        ...

    @abstractmethod
    async def update_owned(self, comment_id: str, user_id: str, content: str) -> Comment | None:
        """Update content only where the row belongs to ``user_id``.

        Returns None when no owned row matched.
        """
        ...

    @abstractmethod
    async def delete_owned(self, comment_id: str, user_id: str) -> bool:
        """Delete only where the row belongs to ``user_id``."""
        ...
