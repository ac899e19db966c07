"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from newsroom.domain.entities import Article, ArticleStatus, SitemapEntry, Tag


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    Public read methods apply the publication gate (published status and an
    elapsed ``published_at``); ``admin_*`` methods see every status.
    """

    # ── Public reads ────────────────────────────────────────────────

    @abstractmethod
    async def get_published(self, page: int, per_page: int) -> list[Article]:
        """Visible articles, newest publication first."""
        ...

    @abstractmethod
    async def count_published(self) -> int:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Article | None:
        """Single visible article with its tags; counts one view per call."""
        ...

    @abstractmethod
    async def get_by_category(self, category_slug: str, page: int, per_page: int) -> list[Article]:
        ...

    @abstractmethod
    async def count_by_category(self, category_slug: str) -> int:
        ...

    @abstractmethod
    async def search(self, query: str, page: int, per_page: int) -> list[Article]:
        """Visible articles matching ``query``, most relevant first."""
        ...

    @abstractmethod
    async def count_search(self, query: str) -> int:
        ...

    @abstractmethod
    async def get_all_for_sitemap(self) -> list[SitemapEntry]:
        ...

    @abstractmethod
    async def get_tags_for_article(self, article_id: int) -> list[Tag]:
        ...

    # ── Admin reads ─────────────────────────────────────────────────

    @abstractmethod
    async def admin_get_all(
        self, page: int, per_page: int, status: ArticleStatus | None = None
    ) -> list[Article]:
        """Every article (optionally one status), most recently updated first."""
        ...

    @abstractmethod
    async def count_admin(self, status: ArticleStatus | None = None) -> int:
        ...

    @abstractmethod
    async def admin_get_by_id(self, article_id: int) -> Article | None:
        """Any-status article with ``tag_ids`` populated."""
        ...

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        ...

    @abstractmethod
    async def count_by_status(self) -> dict[ArticleStatus, int]:
        ...

    @abstractmethod
    async def total_views(self) -> int:
        ...

    # ── Writes ──────────────────────────────────────────────────────

    @abstractmethod
    async def create(self, article: Article, tag_ids: list[int] | None = None) -> Article:
        """Persist a new article (and its tag set, when given) and return it with its ID.

        Raises DuplicateEntityError when the slug is already taken.
        """
        ...

    @abstractmethod
    async def update(self, article: Article, tag_ids: list[int] | None = None) -> Article:
        """Overwrite every mutable field except the author; replace tags when given."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """Delete an article and its tag associations. Returns False if not found."""
        ...
