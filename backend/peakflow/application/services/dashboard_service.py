"""Dashboard analytics — counts and chart series computed from full collections."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from peakflow.application.interfaces import (
    ArticleRepository,
    SubscriberRepository,
    UserRoleRepository,
)
from peakflow.application.services.display import category_color
from peakflow.domain.entities import Article, NewsletterSubscriber, Role, UserRole

STATUS_COLORS = {
    "published": "hsl(140, 20%, 50%)",
    "draft": "hsl(0, 0%, 60%)",
}

TIMELINE_MONTHS = 6
RECENT_ARTICLES = 5


@dataclass
class DashboardStats:
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
    recent_articles: list[Article] = field(default_factory=list)


@dataclass
class DashboardCharts:
    timeline: list[dict[str, int | str]]
    categories: list[dict[str, int | str]]
    status: list[dict[str, int | str]]


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _month_label(year: int, month: int) -> str:
    return datetime(year, month, 1).strftime("%b %y")


def growth_rate(this_month: int, last_month: int) -> int:
    """Month-over-month change as a rounded percentage."""
    if last_month > 0:
        # Halves round up, so 12.5 becomes 13 and -12.5 becomes -12.
        return math.floor((this_month - last_month) / last_month * 100 + 0.5)
    return 100 if this_month > 0 else 0


def compute_stats(
    articles: list[Article],
    subscribers: list[NewsletterSubscriber],
    roles: list[UserRole],
    now: datetime,
) -> DashboardStats:
    last_year, last_month = _shift_month(now.year, now.month, -1)
    this_month = sum(1 for a in articles if (a.created_at.year, a.created_at.month) == (now.year, now.month))
    previous = sum(1 for a in articles if (a.created_at.year, a.created_at.month) == (last_year, last_month))
    published = sum(1 for a in articles if a.published)

    newest_first = sorted(articles, key=lambda a: a.created_at, reverse=True)
    return DashboardStats(
        total_articles=len(articles),
        published_articles=published,
        draft_articles=len(articles) - published,
        total_subscribers=len(subscribers),
        active_subscribers=sum(1 for s in subscribers if s.is_active),
        total_users=len(roles),
        admin_users=sum(1 for r in roles if r.role == Role.ADMIN),
        articles_this_month=this_month,
        articles_last_month=previous,
        growth_rate=growth_rate(this_month, previous),
        recent_articles=newest_first[:RECENT_ARTICLES],
    )


def compute_charts(articles: list[Article], now: datetime) -> DashboardCharts:
    months: dict[str, int] = {}
    for offset in range(TIMELINE_MONTHS - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        months[_month_label(year, month)] = 0
    for article in articles:
        key = _month_label(article.created_at.year, article.created_at.month)
        if key in months:
            months[key] += 1

    by_category: dict[str, int] = {}
    for article in articles:
        name = article.category or "general"
        by_category[name] = by_category.get(name, 0) + 1
    categories = sorted(
        (
            {
                "name": name[:1].upper() + name[1:],
                "value": count,
                "fill": category_color(name),
            }
            for name, count in by_category.items()
        ),
        key=lambda item: item["value"],
        reverse=True,
    )

    published = sum(1 for a in articles if a.published)
    return DashboardCharts(
        timeline=[{"month": m, "articles": c} for m, c in months.items()],
        categories=categories,
        status=[
            {"name": "Published", "value": published, "fill": STATUS_COLORS["published"]},
            {"name": "Draft", "value": len(articles) - published, "fill": STATUS_COLORS["draft"]},
        ],
    )


class DashboardService:
    """Loads every collection eagerly and derives the overview from it."""

    def __init__(
        self,
        articles: ArticleRepository,
        subscribers: SubscriberRepository,
        roles: UserRoleRepository,
    ):
        self._articles = articles
        self._subscribers = subscribers
        self._roles = roles

    async def stats(self, now: datetime | None = None) -> DashboardStats:
        return compute_stats(
            await self._articles.list_all(),
            await self._subscribers.list_all(),
            await self._roles.list_all(),
            now or datetime.now(timezone.utc),
        )

    async def charts(self, now: datetime | None = None) -> DashboardCharts:
        return compute_charts(await self._articles.list_all(), now or datetime.now(timezone.utc))
