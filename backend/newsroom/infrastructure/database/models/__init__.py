from .admin import AdminModel, LoginAttemptModel
from .article import ArticleModel, article_tags
from .category import CategoryModel
from .tag import TagModel

__all__ = [
    "AdminModel",
    "LoginAttemptModel",
    "ArticleModel",
    "article_tags",
    "CategoryModel",
    "TagModel",
]
