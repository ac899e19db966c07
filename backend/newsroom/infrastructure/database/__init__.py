from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    AdminModel,
    ArticleModel,
    CategoryModel,
    LoginAttemptModel,
    TagModel,
    article_tags,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "AdminModel",
    "ArticleModel",
    "CategoryModel",
    "LoginAttemptModel",
    "TagModel",
    "article_tags",
]
