from abc import ABC, abstractmethod

from newsroom.domain.entities import Category


class CategoryRepository(ABC):
    """Port for category persistence."""

    @abstractmethod
    async def get_all(self) -> list[Category]:
        ...

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Category | None:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Category | None:
        ...

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def delete(self, category_id: int) -> bool:
        """Delete a category; articles referencing it lose the reference."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...
