from .admin_repository import SQLAlchemyAdminRepository, SQLAlchemyLoginAttemptStore
from .article_repository import SQLAlchemyArticleRepository
from .category_repository import SQLAlchemyCategoryRepository
from .tag_repository import SQLAlchemyTagRepository

__all__ = [
    "SQLAlchemyAdminRepository",
    "SQLAlchemyLoginAttemptStore",
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyTagRepository",
]
