"""Application service (use case) for the article lifecycle in the back office.

Turns a submitted ``ArticleForm`` into a persisted ``Article``:

    form → status / timestamps normalised → slug derived and made unique
         → reading time computed → optional image stored → row + tags saved

If the save fails, an image stored for it is discarded again.

Every write goes through this service; nothing else updates article rows.
"""

import logging
from collections.abc import Awaitable, Callable

from newsroom.application.interfaces import ArticleRepository, ImageStorage, ImageUpload
from newsroom.application.schemas import ArticleForm
from newsroom.application.services.slug_resolver import SlugResolver
from newsroom.domain.clock import Clock, as_utc, utc_now
from newsroom.domain.entities import Article, ArticleStatus, Page
from newsroom.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from newsroom.domain.text import reading_time, slugify

logger = logging.getLogger(__name__)

_VALID_STATUSES = {s.value for s in ArticleStatus}

Persist = Callable[[Article, list[int] | None], Awaitable[Article]]


class ArticleService:
    """Orchestrates article create/update/delete. Depends on the repository port (DI)."""

    def __init__(
        self,
        repository: ArticleRepository,
        image_storage: ImageStorage | None = None,
        *,
        clock: Clock = utc_now,
        admin_per_page: int = 20,
    ):
        self._repository = repository
        self._image_storage = image_storage
        self._slugs = SlugResolver(repository)
        self._clock = clock
        self._admin_per_page = admin_per_page

    # ── Reads ───────────────────────────────────────────────────────

    async def get_for_edit(self, article_id: int) -> Article:
        article = await self._repository.admin_get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_admin(self, page: int = 1, status: str | None = None) -> Page[Article]:
        page = max(1, page)
        # An unrecognised filter shows everything rather than nothing.
        status_filter = ArticleStatus(status) if status in _VALID_STATUSES else None
        items = await self._repository.admin_get_all(page, self._admin_per_page, status_filter)
        total = await self._repository.count_admin(status_filter)
        return Page(items=items, total=total, page=page, per_page=self._admin_per_page)

    # ── Writes ──────────────────────────────────────────────────────

    async def create_article(
        self, form: ArticleForm, admin_id: int | None, image: ImageUpload | None = None
    ) -> Article:
        status = self.normalize_status(form.status)
        base_slug = slugify(form.title)

        slug = await self._slugs.resolve(base_slug)
        new_image = await self._store_image(image)

        article = Article(
            title=form.title,
            slug=slug,
            body=form.body,
            excerpt=form.excerpt or None,
            featured_image=new_image,
            category_id=form.category_id,
            admin_id=admin_id,
            status=status,
            published_at=self._resolve_published_at(status, form.published_at, None),
            scheduled_at=as_utc(form.scheduled_at),
            meta_title=form.meta_title or None,
            meta_description=form.meta_description or None,
            reading_time=reading_time(form.body),
        )

        created = await self._persist(
            self._repository.create, article, _unique(form.tags), base_slug, new_image
        )
        logger.info(
            "Created article %s '%s' (status=%s, slug=%s)",
            created.id, created.title, created.status.value, created.slug,
        )
        return created

    async def update_article(
        self, article_id: int, form: ArticleForm, image: ImageUpload | None = None
    ) -> Article:
        existing = await self.get_for_edit(article_id)
        status = self.normalize_status(form.status)

        base_slug = slugify(form.slug) or slugify(form.title)
        slug = await self._slugs.resolve(base_slug, exclude_id=existing.id)
        new_image = await self._store_image(image)

        article = Article(
            id=existing.id,
            title=form.title,
            slug=slug,
            body=form.body,
            excerpt=form.excerpt or None,
            featured_image=new_image or existing.featured_image,
            category_id=form.category_id,
            admin_id=existing.admin_id,
            status=status,
            published_at=self._resolve_published_at(status, form.published_at, existing.published_at),
            scheduled_at=as_utc(form.scheduled_at),
            meta_title=form.meta_title or None,
            meta_description=form.meta_description or None,
            reading_time=reading_time(form.body),
            view_count=existing.view_count,
            created_at=existing.created_at,
        )
        article.touch()

        updated = await self._persist(
            self._repository.update, article, _unique(form.tags), base_slug, new_image
        )
        if updated.slug != existing.slug:
            logger.info("Article %s slug changed '%s' → '%s'", article_id, existing.slug, updated.slug)
        logger.info("Updated article %s (status=%s)", article_id, updated.status.value)
        return updated

    async def delete_article(self, article_id: int) -> None:
        deleted = await self._repository.delete(article_id)
        if not deleted:
            raise EntityNotFoundError("Article", article_id)
        logger.info("Deleted article %s", article_id)

    # ── Policies ────────────────────────────────────────────────────

    @staticmethod
    def normalize_status(raw: str | None) -> ArticleStatus:
        """Unknown or missing status values are saved as drafts."""
        status = ArticleStatus.normalize(raw)
        if (raw or "").strip().lower() not in _VALID_STATUSES:
            logger.warning("Unknown article status %r saved as draft", raw)
        return status

    def _resolve_published_at(self, status, submitted, previous):
        """Submitted time wins; a published article never goes out without one."""
        if submitted is not None:
            return as_utc(submitted)
        if status is not ArticleStatus.PUBLISHED:
            return None
        if previous is not None:
            return as_utc(previous)
        return self._clock()

    # ── Helpers ─────────────────────────────────────────────────────

    async def _persist(
        self,
        op: Persist,
        article: Article,
        tag_ids: list[int],
        base_slug: str,
        new_image: str | None = None,
    ) -> Article:
        """Save the article; an image stored for this save is removed if the save fails."""
        try:
            return await self._save_with_slug_retry(op, article, tag_ids, base_slug)
        except Exception:
            if new_image is not None and self._image_storage is not None:
                await self._image_storage.discard(new_image)
            raise

    async def _save_with_slug_retry(
        self, op: Persist, article: Article, tag_ids: list[int], base_slug: str
    ) -> Article:
        try:
            return await op(article, tag_ids)
        except DuplicateEntityError as exc:
            if exc.field != "slug":
                raise
            # Lost a race for the slug between the check and the write; one retry.
            lost = article.slug
            article.slug = await self._slugs.next_after(base_slug, lost, exclude_id=article.id)
            logger.warning("Slug '%s' claimed concurrently, retrying as '%s'", lost, article.slug)
            return await op(article, tag_ids)

    async def _store_image(self, image: ImageUpload | None) -> str | None:
        if image is None or not image.content or self._image_storage is None:
            return None
        path = await self._image_storage.store_image(image)
        if path is None:
            logger.warning("Featured image '%s' rejected; keeping previous image", image.filename)
        return path


def _unique(tag_ids: list[int]) -> list[int]:
    return list(dict.fromkeys(tag_ids))
