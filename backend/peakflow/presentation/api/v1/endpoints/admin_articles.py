"""Admin article management — drafts included, admin only."""

from fastapi import APIRouter, Depends, HTTPException, status

from peakflow.application.schemas import (
    ArticleCreate,
    ArticleDisplayResponse,
    ArticleResponse,
    ArticleUpdate,
    FeaturedSelection,
)
from peakflow.application.services import ArticleService
from peakflow.domain.exceptions import EntityNotFoundError, ValidationError
from peakflow.infrastructure.dependencies import get_article_service, require_admin

router = APIRouter(
    prefix="/admin/articles",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[ArticleResponse])
async def list_all_articles(
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Every article, drafts included, newest first."""
    articles = await service.list_all()
    return [ArticleResponse.model_validate(a, from_attributes=True) for a in articles]


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.create_article(data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/featured", response_model=list[ArticleDisplayResponse])
async def set_featured(
    data: FeaturedSelection,
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleDisplayResponse]:
    """Replace the featured selection with the given ids, in order."""
    try:
        featured = await service.set_featured(data.article_ids)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [ArticleDisplayResponse.model_validate(a, from_attributes=True) for a in featured]


@router.put("/{article_id}/featured", response_model=list[ArticleDisplayResponse])
async def set_single_featured(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleDisplayResponse]:
    """Make one article the only featured article."""
    try:
        featured = await service.set_featured([article_id])
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [ArticleDisplayResponse.model_validate(a, from_attributes=True) for a in featured]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.update_article(article_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("/{article_id}/toggle-publish", response_model=ArticleResponse)
async def toggle_publish(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Flip the published flag; calling twice restores the original state."""
    try:
        article = await service.toggle_published(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Hard delete; the article's comments go with it."""
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
