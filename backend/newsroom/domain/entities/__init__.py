from .admin import Admin, AdminRole, LoginAttempt
from .article import Article, ArticleStatus, SitemapEntry
from .category import Category
from .page import Page, page_offset
from .tag import Tag

__all__ = [
    "Admin",
    "AdminRole",
    "LoginAttempt",
    "Article",
    "ArticleStatus",
    "SitemapEntry",
    "Category",
    "Page",
    "page_offset",
    "Tag",
]
