"""Public newsletter signup."""

from fastapi import APIRouter, Depends

from peakflow.application.schemas import SubscribeRequest, SubscribeResponse
from peakflow.application.services import NewsletterService
from peakflow.infrastructure.dependencies import get_newsletter_service

router = APIRouter(prefix="/newsletter", tags=["Newsletter"])


@router.post("/subscribe", response_model=SubscribeResponse)
async def subscribe(
    data: SubscribeRequest,
    service: NewsletterService = Depends(get_newsletter_service),
) -> SubscribeResponse:
    """Sign up an email. Invalid emails are rejected with 422 before any write;
    a repeat signup answers 200 with ``already_subscribed``.
    """
    outcome = await service.subscribe(data.email)
    return SubscribeResponse(status=outcome.status, title=outcome.title, message=outcome.message)
