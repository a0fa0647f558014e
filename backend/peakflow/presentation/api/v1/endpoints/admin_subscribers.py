"""Admin newsletter subscriber management and CSV export."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from peakflow.application.schemas import SubscriberResponse
from peakflow.application.services import NewsletterService
from peakflow.domain.exceptions import EntityNotFoundError
from peakflow.infrastructure.dependencies import get_newsletter_service, require_admin

router = APIRouter(
    prefix="/admin/subscribers",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[SubscriberResponse])
async def list_subscribers(
    service: NewsletterService = Depends(get_newsletter_service),
) -> list[SubscriberResponse]:
    subscribers = await service.list_subscribers()
    return [SubscriberResponse.model_validate(s, from_attributes=True) for s in subscribers]


@router.get("/export")
async def export_subscribers(
    service: NewsletterService = Depends(get_newsletter_service),
) -> Response:
    """Download every subscriber as CSV."""
    try:
        export = await service.export_csv()
    except EntityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No subscribers to export")
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/{subscriber_id}/toggle", response_model=SubscriberResponse)
async def toggle_subscriber(
    subscriber_id: str,
    service: NewsletterService = Depends(get_newsletter_service),
) -> SubscriberResponse:
    try:
        subscriber = await service.toggle_active(subscriber_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SubscriberResponse.model_validate(subscriber, from_attributes=True)


@router.delete("/{subscriber_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscriber(
    subscriber_id: str,
    service: NewsletterService = Depends(get_newsletter_service),
) -> None:
    try:
        await service.delete_subscriber(subscriber_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
