"""Unit tests for sitemap rendering."""

from datetime import date, datetime, timezone

import pytest

from peakflow.application.services import SitemapService
from peakflow.application.services.sitemap_service import STATIC_PAGES, render_sitemap


@pytest.mark.asyncio
async def test_sitemap_lists_static_pages_then_published_articles(article_repo):
    older = article_repo.add(
        title="Old", published=True, updated_at=datetime(2024, 2, 1, tzinfo=timezone.utc)
    )
    newer = article_repo.add(
        title="New", published=True, updated_at=datetime(2024, 3, 1, tzinfo=timezone.utc)
    )
    article_repo.add(title="Draft", published=False)

    service = SitemapService(article_repo, "https://default.example")
    entries = await service.build_entries("https://blog.example/", today=date(2024, 3, 10))

    assert len(entries) == len(STATIC_PAGES) + 2
    assert entries[0].loc == "https://blog.example/"
    assert entries[0].lastmod == "2024-03-10"
    assert [e.loc for e in entries[-2:]] == [
        f"https://blog.example/article/{newer.id}",
        f"https://blog.example/article/{older.id}",
    ]
    assert entries[-1].lastmod == "2024-02-01"
    assert entries[-1].priority == "0.9"


@pytest.mark.asyncio
async def test_render_uses_default_base_url(article_repo):
    xml = await SitemapService(article_repo, "https://default.example").render(today=date(2024, 3, 10))

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<loc>https://default.example/about</loc>" in xml
    assert xml.count("<url>") == len(STATIC_PAGES)


def test_empty_sitemap_is_valid_urlset():
    xml = render_sitemap([])
    assert "<urlset" in xml
    assert "<url>" not in xml
