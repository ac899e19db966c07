from abc import ABC, abstractmethod

from newsroom.domain.entities import Tag


class TagRepository(ABC):
    """Port for tag persistence."""

    @abstractmethod
    async def get_all(self) -> list[Tag]:
        ...

    @abstractmethod
    async def get_by_id(self, tag_id: int) -> Tag | None:
        ...

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        ...

    @abstractmethod
    async def create(self, tag: Tag) -> Tag:
        ...

    @abstractmethod
    async def delete(self, tag_id: int) -> bool:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...
