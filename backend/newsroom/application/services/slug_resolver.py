"""Unique slug resolution against a content store."""

import logging

from newsroom.application.interfaces import ArticleRepository, CategoryRepository, TagRepository

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "untitled"

SlugStore = ArticleRepository | CategoryRepository | TagRepository


class SlugResolver:
    """Appends ``-1``, ``-2``, … to a base slug until no other row holds it.

    The check is advisory: two concurrent creates can pass it with the same
    candidate. The unique constraint on the slug column is what actually
    guarantees uniqueness; see ``ArticleService`` for the retry.
    """

    def __init__(self, repository: SlugStore):
        self._repository = repository

    async def resolve(self, base_slug: str, exclude_id: int | None = None) -> str:
        base = base_slug or FALLBACK_SLUG
        return await self._first_free(base, start=1, exclude_id=exclude_id, try_base=True)

    async def next_after(self, base_slug: str, taken: str, exclude_id: int | None = None) -> str:
        """Resolve again after ``taken`` was lost to a concurrent write."""
        base = base_slug or FALLBACK_SLUG
        start = 1
        if taken != base and taken.startswith(f"{base}-"):
            suffix = taken[len(base) + 1 :]
            if suffix.isdigit():
                start = int(suffix) + 1
        return await self._first_free(base, start=start, exclude_id=exclude_id, try_base=False)

    async def _first_free(
        self, base: str, *, start: int, exclude_id: int | None, try_base: bool
    ) -> str:
        if try_base and not await self._repository.slug_exists(base, exclude_id):
            return base

        i = start
        while True:
            candidate = f"{base}-{i}"
            if not await self._repository.slug_exists(candidate, exclude_id):
                logger.debug("Slug '%s' taken, using '%s'", base, candidate)
                return candidate
            i += 1
