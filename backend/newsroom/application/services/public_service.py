"""Read-side use cases for the public site: home listing, article pages,
category archives, search and taxonomy lists.

Every article read here goes through the repository's public paths, so the
publication gate applies; drafts and scheduled pieces never surface.
"""

import logging
from dataclasses import dataclass

from newsroom.application.interfaces import ArticleRepository, CategoryRepository, TagRepository
from newsroom.domain.entities import Article, Category, Page, Tag
from newsroom.domain.exceptions import EntityNotFoundError
from newsroom.domain.text import excerpt

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 200
META_DESCRIPTION_LENGTH = 180


@dataclass
class ArticleSeo:
    page_title: str
    meta_description: str
    canonical_url: str


@dataclass
class PublicArticle:
    article: Article
    seo: ArticleSeo


@dataclass
class CategoryArchive:
    category: Category
    articles: Page[Article]


class PublicService:
    def __init__(
        self,
        articles: ArticleRepository,
        categories: CategoryRepository,
        tags: TagRepository,
        *,
        per_page: int = 10,
        app_name: str = "",
        app_url: str = "",
        seo_separator: str = " | ",
        default_meta_desc: str = "",
    ):
        self._articles = articles
        self._categories = categories
        self._tags = tags
        self._per_page = per_page
        self._app_name = app_name
        self._app_url = app_url.rstrip("/")
        self._separator = seo_separator
        self._default_meta_desc = default_meta_desc

    async def home(self, page: int = 1) -> Page[Article]:
        page = max(1, page)
        items = await self._articles.get_published(page, self._per_page)
        total = await self._articles.count_published()
        return Page(items=items, total=total, page=page, per_page=self._per_page)

    async def get_article(self, slug: str) -> PublicArticle:
        """Visible article by slug, with SEO fields resolved. Counts one view."""
        article = await self._articles.get_by_slug(slug)
        if article is None:
            raise EntityNotFoundError("Article", slug)
        return PublicArticle(article=article, seo=self.seo_for(article))

    async def category_archive(self, slug: str, page: int = 1) -> CategoryArchive:
        category = await self._categories.get_by_slug(slug)
        if category is None:
            raise EntityNotFoundError("Category", slug)

        page = max(1, page)
        items = await self._articles.get_by_category(slug, page, self._per_page)
        total = await self._articles.count_by_category(slug)
        return CategoryArchive(
            category=category,
            articles=Page(items=items, total=total, page=page, per_page=self._per_page),
        )

    async def search(self, query: str, page: int = 1) -> Page[Article]:
        query = " ".join((query or "").split())[:MAX_QUERY_LENGTH]
        page = max(1, page)
        if not query:
            return Page(items=[], total=0, page=page, per_page=self._per_page)

        items = await self._articles.search(query, page, self._per_page)
        total = await self._articles.count_search(query)
        logger.debug("Search %r → %d hits", query, total)
        return Page(items=items, total=total, page=page, per_page=self._per_page)

    async def list_categories(self) -> list[Category]:
        return await self._categories.get_all()

    async def list_tags(self) -> list[Tag]:
        return await self._tags.get_all()

    def seo_for(self, article: Article) -> ArticleSeo:
        """Meta title and description fall back to the title and a body excerpt."""
        title = article.meta_title or article.title
        description = (
            article.meta_description
            or article.excerpt
            or excerpt(article.body, META_DESCRIPTION_LENGTH)
            or self._default_meta_desc
        )
        return ArticleSeo(
            page_title=f"{title}{self._separator}{self._app_name}",
            meta_description=description,
            canonical_url=f"{self._app_url}/articles/{article.slug}",
        )
