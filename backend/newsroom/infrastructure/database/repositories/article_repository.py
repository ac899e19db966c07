"""Concrete article repository backed by SQLAlchemy.

Public read paths apply the publication gate and join category and author
for display; ``admin_*`` paths see every status. Writes run inside a
SAVEPOINT so a uniqueness violation can be retried in the same request.
"""

import logging
import re

from sqlalchemy import and_, case, delete, func, insert, literal, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsroom.application.interfaces import ArticleRepository
from newsroom.domain.clock import Clock, as_utc, utc_now
from newsroom.domain.entities import Article, ArticleStatus, SitemapEntry, Tag, page_offset
from newsroom.domain.exceptions import DuplicateEntityError, EntityNotFoundError, PersistenceError
from newsroom.infrastructure.database.models import (
    AdminModel,
    ArticleModel,
    CategoryModel,
    TagModel,
    article_tags,
)

logger = logging.getLogger(__name__)

# Column weights for search relevance.
_TITLE_WEIGHT = 3
_EXCERPT_WEIGHT = 2
_BODY_WEIGHT = 1
_MAX_SEARCH_TERMS = 8
_SEARCH_TERM = re.compile(r"\w{2,}", re.UNICODE)
_SHORT_TERM = re.compile(r"\w", re.UNICODE)


def _search_terms(query: str) -> list[str]:
    """Words of two or more characters; single characters only when nothing longer was typed."""
    found = _SEARCH_TERM.findall(query) or _SHORT_TERM.findall(query)
    terms = dict.fromkeys(t.lower() for t in found)
    return list(terms)[:_MAX_SEARCH_TERMS]


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession, clock: Clock = utc_now):
        self._session = session
        self._clock = clock

    # ── Mapping ─────────────────────────────────────────────────────

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            slug=model.slug,
            body=model.body or "",
            excerpt=model.excerpt,
            featured_image=model.featured_image,
            category_id=model.category_id,
            admin_id=model.admin_id,
            status=ArticleStatus.normalize(model.status),
            published_at=as_utc(model.published_at),
            scheduled_at=as_utc(model.scheduled_at),
            meta_title=model.meta_title,
            meta_description=model.meta_description,
            reading_time=model.reading_time,
            view_count=model.view_count,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _from_row(self, row) -> Article:
        """Map a joined (article, category name, category slug, author) row."""
        article = self._to_entity(row.ArticleModel)
        article.category_name = row.category_name
        article.category_slug = row.category_slug
        article.author = row.author
        relevance = getattr(row, "relevance", None)
        if relevance is not None:
            article.relevance = float(relevance)
        return article

    def _apply(self, model: ArticleModel, article: Article) -> None:
        """Copy every mutable field onto the model. ``admin_id`` is set on insert only."""
        model.title = article.title
        model.slug = article.slug
        model.body = article.body
        model.excerpt = article.excerpt
        model.featured_image = article.featured_image
        model.category_id = article.category_id
        model.status = article.status.value
        model.published_at = as_utc(article.published_at)
        model.scheduled_at = as_utc(article.scheduled_at)
        model.meta_title = article.meta_title
        model.meta_description = article.meta_description
        model.reading_time = max(1, article.reading_time)
        model.updated_at = as_utc(article.updated_at)

    # ── Query building blocks ───────────────────────────────────────

    def _published_gate(self):
        """Visible iff published with a publish time at or before now."""
        return and_(
            ArticleModel.status == ArticleStatus.PUBLISHED.value,
            ArticleModel.published_at.is_not(None),
            ArticleModel.published_at <= self._clock(),
        )

    def _listing(self, *extra_columns):
        return (
            select(
                ArticleModel,
                CategoryModel.name.label("category_name"),
                CategoryModel.slug.label("category_slug"),
                AdminModel.username.label("author"),
                *extra_columns,
            )
            .outerjoin(CategoryModel, CategoryModel.id == ArticleModel.category_id)
            .outerjoin(AdminModel, AdminModel.id == ArticleModel.admin_id)
            # View counters are bumped with bulk UPDATEs; always reload rows.
            .execution_options(populate_existing=True)
        )

    async def _count(self, *criteria) -> int:
        stmt = select(func.count(ArticleModel.id))
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    # ── Public reads ────────────────────────────────────────────────

    async def get_published(self, page: int, per_page: int) -> list[Article]:
        stmt = (
            self._listing()
            .where(self._published_gate())
            .order_by(ArticleModel.published_at.desc(), ArticleModel.id.desc())
            .offset(page_offset(page, per_page))
            .limit(per_page)
        )
        result = await self._session.execute(stmt)
        return [self._from_row(row) for row in result.all()]

    async def count_published(self) -> int:
        return await self._count(self._published_gate())

    async def get_by_slug(self, slug: str) -> Article | None:
        stmt = self._listing().where(ArticleModel.slug == slug, self._published_gate())
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None

        article = self._from_row(row)
        await self._session.execute(
            update(ArticleModel)
            .where(ArticleModel.id == article.id)
            .values(view_count=ArticleModel.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        article.view_count += 1
        article.tags = await self.get_tags_for_article(article.id)
        article.tag_ids = [t.id for t in article.tags]
        return article

    async def get_by_category(self, category_slug: str, page: int, per_page: int) -> list[Article]:
        stmt = (
            self._listing()
            .where(CategoryModel.slug == category_slug, self._published_gate())
            .order_by(ArticleModel.published_at.desc(), ArticleModel.id.desc())
            .offset(page_offset(page, per_page))
            .limit(per_page)
        )
        result = await self._session.execute(stmt)
        return [self._from_row(row) for row in result.all()]

    async def count_by_category(self, category_slug: str) -> int:
        stmt = (
            select(func.count(ArticleModel.id))
            .join(CategoryModel, CategoryModel.id == ArticleModel.category_id)
            .where(CategoryModel.slug == category_slug, self._published_gate())
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _search_clauses(self, query: str):
        """Return (match predicate, relevance expression) or None when nothing is searchable.

        Relevance is a weighted count of matching terms per column, so the
        ranking is the same on SQLite and PostgreSQL.
        """
        terms = _search_terms(query)
        if not terms:
            return None

        matches = []
        relevance = literal(0)
        for term in terms:
            pattern = _like_pattern(term)
            in_title = ArticleModel.title.ilike(pattern, escape="\\")
            in_excerpt = ArticleModel.excerpt.ilike(pattern, escape="\\")
            in_body = ArticleModel.body.ilike(pattern, escape="\\")
            matches.extend([in_title, in_excerpt, in_body])
            relevance = (
                relevance
                + case((in_title, _TITLE_WEIGHT), else_=0)
                + case((in_excerpt, _EXCERPT_WEIGHT), else_=0)
                + case((in_body, _BODY_WEIGHT), else_=0)
            )
        return or_(*matches), relevance

    async def search(self, query: str, page: int, per_page: int) -> list[Article]:
        clauses = self._search_clauses(query)
        if clauses is None:
            return []
        match, relevance = clauses

        relevance = relevance.label("relevance")
        stmt = (
            self._listing(relevance)
            .where(self._published_gate(), match)
            .order_by(relevance.desc(), ArticleModel.published_at.desc(), ArticleModel.id.desc())
            .offset(page_offset(page, per_page))
            .limit(per_page)
        )
        result = await self._session.execute(stmt)
        return [self._from_row(row) for row in result.all()]

    async def count_search(self, query: str) -> int:
        clauses = self._search_clauses(query)
        if clauses is None:
            return 0
        return await self._count(self._published_gate(), clauses[0])

    async def get_all_for_sitemap(self) -> list[SitemapEntry]:
        stmt = (
            select(ArticleModel.slug, ArticleModel.updated_at)
            .where(self._published_gate())
            .order_by(ArticleModel.published_at.desc())
        )
        result = await self._session.execute(stmt)
        return [SitemapEntry(slug=slug, updated_at=as_utc(updated_at)) for slug, updated_at in result.all()]

    async def get_tags_for_article(self, article_id: int) -> list[Tag]:
        stmt = (
            select(TagModel)
            .join(article_tags, article_tags.c.tag_id == TagModel.id)
            .where(article_tags.c.article_id == article_id)
            .order_by(TagModel.name)
        )
        result = await self._session.execute(stmt)
        return [Tag(id=m.id, name=m.name, slug=m.slug) for m in result.scalars().all()]

    # ── Admin reads ─────────────────────────────────────────────────

    async def admin_get_all(
        self, page: int, per_page: int, status: ArticleStatus | None = None
    ) -> list[Article]:
        stmt = self._listing()
        if status is not None:
            stmt = stmt.where(ArticleModel.status == status.value)
        stmt = (
            stmt.order_by(ArticleModel.updated_at.desc(), ArticleModel.id.desc())
            .offset(page_offset(page, per_page))
            .limit(per_page)
        )
        result = await self._session.execute(stmt)
        return [self._from_row(row) for row in result.all()]

    async def count_admin(self, status: ArticleStatus | None = None) -> int:
        if status is None:
            return await self._count()
        return await self._count(ArticleModel.status == status.value)

    async def admin_get_by_id(self, article_id: int) -> Article | None:
        row = (await self._session.execute(self._listing().where(ArticleModel.id == article_id))).first()
        if row is None:
            return None
        article = self._from_row(row)
        article.tags = await self.get_tags_for_article(article.id)
        article.tag_ids = [t.id for t in article.tags]
        return article

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        stmt = select(ArticleModel.id).where(ArticleModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(ArticleModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.first() is not None

    async def count_by_status(self) -> dict[ArticleStatus, int]:
        stmt = select(ArticleModel.status, func.count(ArticleModel.id)).group_by(ArticleModel.status)
        counts = {status: 0 for status in ArticleStatus}
        for raw, n in (await self._session.execute(stmt)).all():
            status = ArticleStatus.normalize(raw)
            counts[status] += n
        return counts

    async def total_views(self) -> int:
        result = await self._session.execute(select(func.coalesce(func.sum(ArticleModel.view_count), 0)))
        return int(result.scalar_one())

    # ── Writes ──────────────────────────────────────────────────────

    async def create(self, article: Article, tag_ids: list[int] | None = None) -> Article:
        model = ArticleModel(
            admin_id=article.admin_id,
            view_count=article.view_count,
            created_at=as_utc(article.created_at),
        )
        self._apply(model, article)
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
                if tag_ids is not None:
                    await self._replace_tags(model.id, tag_ids)
        except IntegrityError as exc:
            raise self._integrity_error("create", exc, article.slug) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to create article '%s': %s", article.slug, exc)
            raise PersistenceError("create article", str(exc)) from exc

        created = self._to_entity(model)
        if tag_ids is not None:
            created.tags = await self.get_tags_for_article(created.id)
            created.tag_ids = [t.id for t in created.tags]
        return created

    async def update(self, article: Article, tag_ids: list[int] | None = None) -> Article:
        try:
            async with self._session.begin_nested():
                model = await self._session.get(ArticleModel, article.id, populate_existing=True)
                if model is None:
                    raise EntityNotFoundError("Article", article.id)
                self._apply(model, article)
                await self._session.flush()
                if tag_ids is not None:
                    await self._replace_tags(model.id, tag_ids)
        except IntegrityError as exc:
            raise self._integrity_error("update", exc, article.slug) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to update article %s: %s", article.id, exc)
            raise PersistenceError("update article", str(exc)) from exc

        updated = self._to_entity(model)
        updated.tags = await self.get_tags_for_article(updated.id)
        updated.tag_ids = [t.id for t in updated.tags]
        return updated

    async def delete(self, article_id: int) -> bool:
        try:
            model = await self._session.get(ArticleModel, article_id)
            if model is None:
                return False
            await self._session.execute(delete(article_tags).where(article_tags.c.article_id == article_id))
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to delete article %s: %s", article_id, exc)
            raise PersistenceError("delete article", str(exc)) from exc
        return True

    # ── Helpers ─────────────────────────────────────────────────────

    async def _replace_tags(self, article_id: int, tag_ids: list[int]) -> None:
        """Full replacement of the article's tag set; unknown tag ids are skipped."""
        await self._session.execute(delete(article_tags).where(article_tags.c.article_id == article_id))

        wanted = list(dict.fromkeys(tag_ids))
        if not wanted:
            return
        result = await self._session.execute(select(TagModel.id).where(TagModel.id.in_(wanted)))
        known = set(result.scalars().all())
        skipped = [t for t in wanted if t not in known]
        if skipped:
            logger.warning("Ignoring unknown tag ids %s for article %s", skipped, article_id)

        rows = [{"article_id": article_id, "tag_id": t} for t in wanted if t in known]
        if rows:
            await self._session.execute(insert(article_tags), rows)

    @staticmethod
    def _integrity_error(operation: str, exc: IntegrityError, slug: str) -> Exception:
        if "slug" in str(exc.orig).lower():
            return DuplicateEntityError("Article", "slug", slug)
        logger.error("Integrity error during article %s: %s", operation, exc)
        return PersistenceError(f"{operation} article", str(exc))
