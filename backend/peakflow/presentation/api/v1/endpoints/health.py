"""Health check endpoint — no database access, always available."""

from fastapi import APIRouter

from peakflow.config import get_settings
from peakflow.infrastructure.realtime import get_change_feed

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status and live subscriber count."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "live_subscribers": get_change_feed().subscriber_count,
    }
