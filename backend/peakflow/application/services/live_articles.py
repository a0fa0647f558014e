"""Live article list — published articles for a category, kept current."""

from peakflow.application.services.article_service import ArticleService
from peakflow.application.services.change_feed import ChangeFeed
from peakflow.application.services.display import ArticleDisplay
from peakflow.application.services.live_query import LiveQuery, LiveState, ServiceScope


class LiveArticleList(LiveQuery[ArticleDisplay]):
    """Display-mapped published articles, newest first.

    Any insert/update/delete on ``articles`` triggers a full re-fetch; the
    category is applied in the query, so the subscription is table-wide.
    """

    table = "articles"

    def __init__(
        self,
        service_scope: ServiceScope[ArticleService],
        change_feed: ChangeFeed,
        category: str | None = None,
    ):
        super().__init__(change_feed)
        self._scope = service_scope
        self._category = category

    @property
    def category(self) -> str | None:
        return self._category

    async def set_category(self, category: str | None) -> LiveState[ArticleDisplay]:
        """Switch category: the subscription is reopened and the list re-fetched."""
        if category == self._category:
            return self.state
        self._category = category
        return await self.resubscribe()

    async def fetch(self) -> list[ArticleDisplay]:
        async with self._scope() as service:
            return await service.list_published(self._category)

    @property
    def articles(self) -> tuple[ArticleDisplay, ...]:
        return self.state.items

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> str | None:
        return self.state.error
