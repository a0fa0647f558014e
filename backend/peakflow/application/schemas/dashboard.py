"""Pydantic DTOs for the admin dashboard overview."""

from pydantic import BaseModel

from peakflow.application.schemas.article import ArticleResponse


class DashboardStatsResponse(BaseModel):
    total_articles: int
    published_articles: int
    draft_articles: int
    total_subscribers: int
    active_subscribers: int
    total_users: int
    admin_users: int
    articles_this_month: int
    articles_last_month: int
    growth_rate: int
    recent_articles: list[ArticleResponse]


class TimelinePoint(BaseModel):
    month: str
    articles: int


class ChartSlice(BaseModel):
    name: str
    value: int
    fill: str


class DashboardChartsResponse(BaseModel):
    timeline: list[TimelinePoint]
    categories: list[ChartSlice]
    status: list[ChartSlice]
