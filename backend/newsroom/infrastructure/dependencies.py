"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.application.interfaces import ImageStorage, PasswordHasher
from newsroom.application.services import (
    ArticleService,
    AuthService,
    CategoryService,
    DashboardService,
    FeedService,
    PublicService,
    TagService,
)
from newsroom.config import get_settings
from newsroom.domain.entities import Admin
from newsroom.infrastructure.database.repositories import (
    SQLAlchemyAdminRepository,
    SQLAlchemyArticleRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyLoginAttemptStore,
    SQLAlchemyTagRepository,
)
from newsroom.infrastructure.database.session import get_db_session
from newsroom.infrastructure.security import Argon2PasswordHasher
from newsroom.infrastructure.storage.local_image_storage import LocalImageStorage

logger = logging.getLogger(__name__)

SESSION_ADMIN_KEY = "admin_id"

_password_hasher = Argon2PasswordHasher()


def get_password_hasher() -> PasswordHasher:
    return _password_hasher


def get_image_storage() -> ImageStorage:
    settings = get_settings()
    return LocalImageStorage(
        upload_dir=settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_bytes=settings.max_upload_mb * 1024 * 1024,
        allowed_types=settings.allowed_image_types,
        max_width=settings.image_max_width,
        max_height=settings.image_max_height,
    )


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
    image_storage: ImageStorage = Depends(get_image_storage),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService with its repository and image storage wired up."""
    settings = get_settings()
    yield ArticleService(
        SQLAlchemyArticleRepository(session),
        image_storage,
        admin_per_page=settings.admin_per_page,
    )


async def get_public_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PublicService, None]:
    """Provides the public read service with SEO defaults from settings."""
    settings = get_settings()
    yield PublicService(
        SQLAlchemyArticleRepository(session),
        SQLAlchemyCategoryRepository(session),
        SQLAlchemyTagRepository(session),
        per_page=settings.articles_per_page,
        app_name=settings.app_name,
        app_url=settings.app_url,
        seo_separator=settings.seo_separator,
        default_meta_desc=settings.default_meta_desc,
    )


async def get_feed_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[FeedService, None]:
    settings = get_settings()
    yield FeedService(
        SQLAlchemyArticleRepository(session),
        SQLAlchemyCategoryRepository(session),
        app_url=settings.app_url,
        admin_path=settings.admin_path,
    )


async def get_category_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CategoryService, None]:
    yield CategoryService(SQLAlchemyCategoryRepository(session))


async def get_tag_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TagService, None]:
    yield TagService(SQLAlchemyTagRepository(session))


async def get_dashboard_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DashboardService, None]:
    yield DashboardService(
        SQLAlchemyArticleRepository(session),
        SQLAlchemyCategoryRepository(session),
        SQLAlchemyTagRepository(session),
    )


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AsyncGenerator[AuthService, None]:
    """Provides the AuthService with lockout limits from settings."""
    settings = get_settings()
    yield AuthService(
        SQLAlchemyAdminRepository(session),
        SQLAlchemyLoginAttemptStore(session),
        hasher,
        max_attempts=settings.max_login_attempts,
        lockout_minutes=settings.lockout_minutes,
    )


async def get_current_admin(
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> Admin:
    """Resolve the signed-in admin from the session cookie, or reject with 401."""
    admin_id = request.session.get(SESSION_ADMIN_KEY)
    admin = await service.get_admin(admin_id) if isinstance(admin_id, int) else None
    if admin is None:
        if admin_id is not None:
            logger.info("Dropping session for unknown admin %r", admin_id)
            request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return admin
