"""SQLAlchemy implementation of the CategoryRepository port."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.application.interfaces import CategoryRepository
from newsroom.domain.clock import as_utc
from newsroom.domain.entities import Category
from newsroom.domain.exceptions import DuplicateEntityError, PersistenceError
from newsroom.infrastructure.database.models import ArticleModel, CategoryModel

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(CategoryRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            created_at=as_utc(model.created_at),
        )

    async def get_all(self) -> list[Category]:
        result = await self._session.execute(select(CategoryModel).order_by(CategoryModel.name))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, category_id: int) -> Category | None:
        model = await self._session.get(CategoryModel, category_id)
        return self._to_entity(model) if model else None

    async def get_by_slug(self, slug: str) -> Category | None:
        result = await self._session.execute(select(CategoryModel).where(CategoryModel.slug == slug))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        stmt = select(CategoryModel.id).where(CategoryModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(CategoryModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.first() is not None

    async def create(self, category: Category) -> Category:
        model = CategoryModel(
            name=category.name,
            slug=category.slug,
            description=category.description,
            created_at=as_utc(category.created_at),
        )
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError("Category", "slug", category.slug) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to create category '%s': %s", category.slug, exc)
            raise PersistenceError("create category", str(exc)) from exc
        return self._to_entity(model)

    async def delete(self, category_id: int) -> bool:
        try:
            model = await self._session.get(CategoryModel, category_id)
            if model is None:
                return False
            # Articles survive, uncategorised. The FK also does this on engines that enforce it.
            await self._session.execute(
                update(ArticleModel)
                .where(ArticleModel.category_id == category_id)
                .values(category_id=None)
                .execution_options(synchronize_session=False)
            )
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to delete category %s: %s", category_id, exc)
            raise PersistenceError("delete category", str(exc)) from exc
        return True

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(CategoryModel.id)))
        return result.scalar_one()
