from dataclasses import dataclass, field

from newsroom.application.interfaces import ArticleRepository, CategoryRepository, TagRepository
from newsroom.domain.entities import Article, ArticleStatus

RECENT_LIMIT = 20


@dataclass
class DashboardStats:
    published: int = 0
    draft: int = 0
    scheduled: int = 0
    views: int = 0
    categories: int = 0
    tags: int = 0


@dataclass
class Dashboard:
    stats: DashboardStats
    recent: list[Article] = field(default_factory=list)


class DashboardService:
    """Back-office overview: counts per status, total views and recent edits."""

    def __init__(
        self,
        articles: ArticleRepository,
        categories: CategoryRepository,
        tags: TagRepository,
    ):
        self._articles = articles
        self._categories = categories
        self._tags = tags

    async def overview(self) -> Dashboard:
        by_status = await self._articles.count_by_status()
        stats = DashboardStats(
            published=by_status.get(ArticleStatus.PUBLISHED, 0),
            draft=by_status.get(ArticleStatus.DRAFT, 0),
            scheduled=by_status.get(ArticleStatus.SCHEDULED, 0),
            views=await self._articles.total_views(),
            categories=await self._categories.count(),
            tags=await self._tags.count(),
        )
        recent = await self._articles.admin_get_all(1, RECENT_LIMIT)
        return Dashboard(stats=stats, recent=recent)
