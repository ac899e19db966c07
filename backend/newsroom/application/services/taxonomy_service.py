"""Application services for categories and tags (back-office CRUD)."""

import logging

from newsroom.application.interfaces import CategoryRepository, TagRepository
from newsroom.application.schemas import CategoryCreate, TagCreate
from newsroom.application.services.slug_resolver import SlugResolver
from newsroom.domain.entities import Category, Tag
from newsroom.domain.exceptions import EntityNotFoundError
from newsroom.domain.text import slugify

logger = logging.getLogger(__name__)


class CategoryService:
    """Category CRUD. Deleting a category keeps its articles, uncategorised."""

    def __init__(self, repository: CategoryRepository):
        self._repository = repository
        self._slugs = SlugResolver(repository)

    async def list_categories(self) -> list[Category]:
        return await self._repository.get_all()

    async def get_category(self, category_id: int) -> Category:
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return category

    async def create_category(self, data: CategoryCreate) -> Category:
        category = Category(
            name=data.name,
            slug=await self._slugs.resolve(slugify(data.name)),
            description=data.description or None,
        )
        created = await self._repository.create(category)
        logger.info("Created category %s '%s'", created.id, created.slug)
        return created

    async def delete_category(self, category_id: int) -> None:
        if not await self._repository.delete(category_id):
            raise EntityNotFoundError("Category", category_id)
        logger.info("Deleted category %s", category_id)


class TagService:
    def __init__(self, repository: TagRepository):
        self._repository = repository
        self._slugs = SlugResolver(repository)

    async def list_tags(self) -> list[Tag]:
        return await self._repository.get_all()

    async def create_tag(self, data: TagCreate) -> Tag:
        tag = Tag(name=data.name, slug=await self._slugs.resolve(slugify(data.name)))
        created = await self._repository.create(tag)
        logger.info("Created tag %s '%s'", created.id, created.slug)
        return created

    async def delete_tag(self, tag_id: int) -> None:
        if not await self._repository.delete(tag_id):
            raise EntityNotFoundError("Tag", tag_id)
        logger.info("Deleted tag %s", tag_id)
