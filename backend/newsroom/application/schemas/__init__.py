from .admin import AdminResponse, DashboardResponse, DashboardStats, LoginRequest
from .article import (
    ArticleForm,
    ArticlePageResponse,
    ArticleResponse,
    ArticleSummaryResponse,
    PublicArticleResponse,
    SeoResponse,
    TagRef,
)
from .taxonomy import (
    CategoryArchiveResponse,
    CategoryCreate,
    CategoryResponse,
    TagCreate,
    TagResponse,
)

__all__ = [
    "AdminResponse",
    "DashboardResponse",
    "DashboardStats",
    "LoginRequest",
    "ArticleForm",
    "ArticlePageResponse",
    "ArticleResponse",
    "ArticleSummaryResponse",
    "PublicArticleResponse",
    "SeoResponse",
    "TagRef",
    "CategoryArchiveResponse",
    "CategoryCreate",
    "CategoryResponse",
    "TagCreate",
    "TagResponse",
]
