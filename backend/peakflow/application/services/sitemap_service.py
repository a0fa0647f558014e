"""Sitemap rendering over the published article collection."""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from peakflow.application.interfaces import ArticleRepository

logger = logging.getLogger(__name__)

# (path, priority, changefreq)
STATIC_PAGES: tuple[tuple[str, str, str], ...] = (
    ("/", "1.0", "daily"),
    ("/about", "0.8", "monthly"),
    ("/contact", "0.7", "monthly"),
    ("/authors", "0.7", "weekly"),
    ("/lifestyle", "0.8", "weekly"),
    ("/growth", "0.8", "weekly"),
    ("/productivity", "0.8", "weekly"),
    ("/tech-tips", "0.8", "weekly"),
    ("/search", "0.6", "weekly"),
    ("/privacy", "0.3", "yearly"),
    ("/terms", "0.3", "yearly"),
)

_TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

_env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(["xml"]),
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: str
    changefreq: str
    priority: str


def render_sitemap(entries: list[SitemapEntry]) -> str:
    return _env.get_template("sitemap.xml").render(entries=entries)


class SitemapService:

    def __init__(self, articles: ArticleRepository, base_url: str):
        self._articles = articles
        self._base_url = base_url.rstrip("/")

    async def build_entries(self, base_url: str | None = None, today: date | None = None) -> list[SitemapEntry]:
        base = (base_url or self._base_url).rstrip("/")
        stamp = (today or date.today()).isoformat()

        entries = [
            SitemapEntry(f"{base}{path}", stamp, changefreq, priority)
            for path, priority, changefreq in STATIC_PAGES
        ]
        articles = await self._articles.list_published()
        for article in sorted(articles, key=lambda a: a.updated_at, reverse=True):
            lastmod = article.updated_at.date().isoformat() if article.updated_at else stamp
            entries.append(SitemapEntry(f"{base}/article/{article.id}", lastmod, "weekly", "0.9"))
        return entries

    async def render(self, base_url: str | None = None, today: date | None = None) -> str:
        entries = await self.build_entries(base_url=base_url, today=today)
        logger.debug("Rendered sitemap with %d entries", len(entries))
        return render_sitemap(entries)
