"""Machine-readable site documents: sitemap.xml and robots.txt."""

import xml.etree.ElementTree as ET

from newsroom.application.interfaces import ArticleRepository, CategoryRepository
from newsroom.domain.clock import as_utc

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
STATIC_PATHS = ("", "/about", "/contact")


class FeedService:
    def __init__(
        self,
        articles: ArticleRepository,
        categories: CategoryRepository,
        *,
        app_url: str,
        admin_path: str = "admin",
    ):
        self._articles = articles
        self._categories = categories
        self._app_url = app_url.rstrip("/")
        self._admin_path = admin_path.strip("/")

    async def sitemap_xml(self) -> str:
        """Static pages, category archives, then every visible article."""
        urlset = ET.Element("urlset", xmlns=SITEMAP_NS)

        for path in STATIC_PATHS:
            self._url(urlset, f"{self._app_url}{path}", changefreq="weekly", priority="0.8")

        for category in await self._categories.get_all():
            self._url(
                urlset,
                f"{self._app_url}/category/{category.slug}",
                changefreq="daily",
                priority="0.7",
            )

        for entry in await self._articles.get_all_for_sitemap():
            self._url(
                urlset,
                f"{self._app_url}/articles/{entry.slug}",
                lastmod=as_utc(entry.updated_at).date().isoformat(),
                changefreq="monthly",
                priority="0.9",
            )

        body = ET.tostring(urlset, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'

    def robots_txt(self) -> str:
        return (
            "User-agent: *\n"
            f"Disallow: /{self._admin_path}/\n"
            "Disallow: /search?\n"
            "Allow: /\n"
            "\n"
            f"Sitemap: {self._app_url}/sitemap.xml\n"
        )

    @staticmethod
    def _url(parent: ET.Element, loc: str, **children: str) -> None:
        url = ET.SubElement(parent, "url")
        ET.SubElement(url, "loc").text = loc
        for tag in ("lastmod", "changefreq", "priority"):
            if tag in children:
                ET.SubElement(url, tag).text = children[tag]
