"""Unit tests for the back-office dashboard."""

import pytest

from newsroom.application.services import DashboardService
from newsroom.domain.entities import Article, ArticleStatus


@pytest.mark.asyncio
async def test_overview_counts(article_repo, category_repo, tag_repo, clock):
    category_repo.add("News", "news")
    tag_repo.add("A")
    tag_repo.add("B")
    await article_repo.create(
        Article(title="P", slug="p", status=ArticleStatus.PUBLISHED, published_at=clock.now, view_count=7)
    )
    await article_repo.create(Article(title="D", slug="d"))
    await article_repo.create(Article(title="S", slug="s", status=ArticleStatus.SCHEDULED))

    dashboard = await DashboardService(article_repo, category_repo, tag_repo).overview()

    assert dashboard.stats.published == 1
    assert dashboard.stats.draft == 1
    assert dashboard.stats.scheduled == 1
    assert dashboard.stats.views == 7
    assert dashboard.stats.categories == 1
    assert dashboard.stats.tags == 2
    assert len(dashboard.recent) == 3
