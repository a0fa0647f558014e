"""Admin dashboard overview."""

from fastapi import APIRouter, Depends

from peakflow.application.schemas import (
    ArticleResponse,
    ChartSlice,
    DashboardChartsResponse,
    DashboardStatsResponse,
    TimelinePoint,
)
from peakflow.application.services import DashboardService
from peakflow.infrastructure.dependencies import get_dashboard_service, require_admin

router = APIRouter(
    prefix="/admin/dashboard",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStatsResponse:
    stats = await service.stats()
    return DashboardStatsResponse(
        total_articles=stats.total_articles,
        published_articles=stats.published_articles,
        draft_articles=stats.draft_articles,
        total_subscribers=stats.total_subscribers,
        active_subscribers=stats.active_subscribers,
        total_users=stats.total_users,
        admin_users=stats.admin_users,
        articles_this_month=stats.articles_this_month,
        articles_last_month=stats.articles_last_month,
        growth_rate=stats.growth_rate,
        recent_articles=[
            ArticleResponse.model_validate(a, from_attributes=True) for a in stats.recent_articles
        ],
    )


@router.get("/charts", response_model=DashboardChartsResponse)
async def dashboard_charts(
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardChartsResponse:
    """Six-month timeline, category breakdown, and published/draft split."""
    charts = await service.charts()
    return DashboardChartsResponse(
        timeline=[TimelinePoint(**point) for point in charts.timeline],
        categories=[ChartSlice(**item) for item in charts.categories],
        status=[ChartSlice(**item) for item in charts.status],
    )
