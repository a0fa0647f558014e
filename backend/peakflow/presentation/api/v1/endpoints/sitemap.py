"""XML sitemap, served at the site root rather than under /api."""

import logging

from fastapi import APIRouter, Depends, Query, Response

from peakflow.application.services import SitemapService
from peakflow.application.services.sitemap_service import render_sitemap
from peakflow.infrastructure.dependencies import get_sitemap_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sitemap"])

XML_HEADERS = {"Cache-Control": "public, max-age=3600"}


@router.get("/sitemap.xml")
async def sitemap(
    base_url: str | None = Query(None, alias="baseUrl"),
    service: SitemapService = Depends(get_sitemap_service),
) -> Response:
    try:
        body = await service.render(base_url=base_url)
    except Exception:
        logger.exception("Failed to build sitemap")
        return Response(content=render_sitemap([]), media_type="application/xml", status_code=500)
    return Response(content=body, media_type="application/xml", headers=XML_HEADERS)
