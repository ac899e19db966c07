from .article_service import ArticleService
from .auth_service import AuthService
from .dashboard_service import DashboardService
from .feed_service import FeedService
from .public_service import PublicService
from .slug_resolver import SlugResolver
from .taxonomy_service import CategoryService, TagService

__all__ = [
    "ArticleService",
    "AuthService",
    "DashboardService",
    "FeedService",
    "PublicService",
    "SlugResolver",
    "CategoryService",
    "TagService",
]
