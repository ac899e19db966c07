"""SQLAlchemy implementation of the TagRepository port."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.application.interfaces import TagRepository
from newsroom.domain.entities import Tag
from newsroom.domain.exceptions import DuplicateEntityError, PersistenceError
from newsroom.infrastructure.database.models import TagModel, article_tags

logger = logging.getLogger(__name__)


class SQLAlchemyTagRepository(TagRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: TagModel) -> Tag:
        return Tag(id=model.id, name=model.name, slug=model.slug)

    async def get_all(self) -> list[Tag]:
        result = await self._session.execute(select(TagModel).order_by(TagModel.name))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, tag_id: int) -> Tag | None:
        model = await self._session.get(TagModel, tag_id)
        return self._to_entity(model) if model else None

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        stmt = select(TagModel.id).where(TagModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(TagModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.first() is not None

    async def create(self, tag: Tag) -> Tag:
        model = TagModel(name=tag.name, slug=tag.slug)
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError("Tag", "slug", tag.slug) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to create tag '%s': %s", tag.slug, exc)
            raise PersistenceError("create tag", str(exc)) from exc
        return self._to_entity(model)

    async def delete(self, tag_id: int) -> bool:
        try:
            model = await self._session.get(TagModel, tag_id)
            if model is None:
                return False
            await self._session.execute(delete(article_tags).where(article_tags.c.tag_id == tag_id))
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to delete tag %s: %s", tag_id, exc)
            raise PersistenceError("delete tag", str(exc)) from exc
        return True

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(TagModel.id)))
        return result.scalar_one()
