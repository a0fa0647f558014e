"""Public article endpoints — published content only."""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from peakflow.application.schemas import ArticleDisplayResponse
from peakflow.application.services import ArticleService, ChangeFeed, LiveArticleList
from peakflow.application.services.change_feed import format_sse
from peakflow.application.services.display import ArticleDisplay
from peakflow.domain.exceptions import EntityNotFoundError
from peakflow.infrastructure.dependencies import (
    article_service_scope,
    get_article_service,
    get_change_feed,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _to_response(article: ArticleDisplay) -> ArticleDisplayResponse:
    return ArticleDisplayResponse.model_validate(article, from_attributes=True)


@router.get("", response_model=list[ArticleDisplayResponse])
async def list_articles(
    category: str | None = None,
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleDisplayResponse]:
    """Published articles, newest first, optionally for one category."""
    articles = await service.list_published(category)
    return [_to_response(a) for a in articles]


@router.get("/featured", response_model=list[ArticleDisplayResponse])
async def list_featured(
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleDisplayResponse]:
    """The ordered featured selection for the homepage hero."""
    return [_to_response(a) for a in await service.featured()]


@router.get("/search", response_model=list[ArticleDisplayResponse])
async def search_articles(
    q: str | None = None,
    category: str | None = None,
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleDisplayResponse]:
    """Match title, excerpt or author; category ``All`` means any."""
    return [_to_response(a) for a in await service.search(q, category)]


@router.get("/live")
async def live_articles(
    category: str | None = None,
    feed: ChangeFeed = Depends(get_change_feed),
) -> StreamingResponse:
    """SSE stream of the published article list.

    Sends a ``state`` event with the full list after the initial fetch and
    after every change to the articles table.
    """
    live = LiveArticleList(article_service_scope, feed, category=category)

    async def _events() -> AsyncGenerator[str, None]:
        try:
            await live.start()
            async for state in live.snapshots():
                yield format_sse("state", {
                    "articles": [a.to_dict() for a in state.items],
                    "loading": state.loading,
                    "error": state.error,
                })
        finally:
            await live.close()

    return StreamingResponse(_events(), media_type="text/event-stream", headers=SSE_HEADERS)


@router.get("/{article_id}", response_model=ArticleDisplayResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleDisplayResponse:
    """A single published article. Drafts and unknown ids are both 404."""
    try:
        article = await service.get_published(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(article)


@router.get("/{article_id}/related", response_model=list[ArticleDisplayResponse])
async def related_articles(
    article_id: str,
    category: str | None = None,
    limit: int | None = Query(None, ge=1, le=20),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleDisplayResponse]:
    """Same-category articles, or the latest articles when there are none."""
    return [_to_response(a) for a in await service.related(article_id, category, limit)]
