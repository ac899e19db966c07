"""sitemap.xml and robots.txt — served from the site root, outside /api."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from newsroom.application.services import FeedService
from newsroom.infrastructure.dependencies import get_feed_service

router = APIRouter(tags=["Feeds"])


@router.get("/sitemap.xml", response_class=Response)
async def sitemap(service: FeedService = Depends(get_feed_service)) -> Response:
    xml = await service.sitemap_xml()
    return Response(
        content=xml,
        media_type="application/xml",
        headers={"X-Robots-Tag": "noindex"},
    )


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(service: FeedService = Depends(get_feed_service)) -> PlainTextResponse:
    return PlainTextResponse(service.robots_txt())
