from .admin_repository import AdminRepository, LoginAttemptStore
from .article_repository import ArticleRepository
from .category_repository import CategoryRepository
from .image_storage import ImageStorage, ImageUpload
from .password_hasher import PasswordHasher
from .tag_repository import TagRepository

__all__ = [
    "AdminRepository",
    "LoginAttemptStore",
    "ArticleRepository",
    "CategoryRepository",
    "ImageStorage",
    "ImageUpload",
    "PasswordHasher",
    "TagRepository",
]
