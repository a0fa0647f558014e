"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from peakflow.presentation.api.v1.endpoints.health import router as health_router
from peakflow.presentation.api.v1.endpoints.articles import router as articles_router
from peakflow.presentation.api.v1.endpoints.comments import router as comments_router
from peakflow.presentation.api.v1.endpoints.newsletter import router as newsletter_router
from peakflow.presentation.api.v1.endpoints.auth import router as auth_router
from peakflow.presentation.api.v1.endpoints.changes import router as changes_router
from peakflow.presentation.api.v1.endpoints.admin_articles import router as admin_articles_router
from peakflow.presentation.api.v1.endpoints.admin_users import router as admin_users_router
from peakflow.presentation.api.v1.endpoints.admin_subscribers import router as admin_subscribers_router
from peakflow.presentation.api.v1.endpoints.dashboard import router as dashboard_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(articles_router)
router.include_router(comments_router)
router.include_router(newsletter_router)
router.include_router(auth_router)
router.include_router(changes_router)
router.include_router(admin_articles_router)
router.include_router(admin_users_router)
router.include_router(admin_subscribers_router)
router.include_router(dashboard_router)
