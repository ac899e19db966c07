"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from newsroom.domain.clock import as_utc
from newsroom.domain.entities.tag import Tag


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"

    @classmethod
    def normalize(cls, raw: "str | ArticleStatus | None") -> "ArticleStatus":
        """Map any submitted value onto a known status; unknown values become draft."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.DRAFT


@dataclass
class Article:
    """Core domain entity representing an editorial article.

    Display-only fields (``category_name``, ``category_slug``, ``author``,
    ``tags``) are filled by read paths that join related rows and are
    ignored on write.
    """

    title: str
    slug: str
    body: str = ""
    excerpt: str | None = None
    featured_image: str | None = None
    category_id: int | None = None
    admin_id: int | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    published_at: datetime | None = None
    scheduled_at: datetime | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    reading_time: int = 1
    view_count: int = 0
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    category_name: str | None = None
    category_slug: str | None = None
    author: str | None = None
    tags: list[Tag] = field(default_factory=list)
    tag_ids: list[int] = field(default_factory=list)
    relevance: float | None = None

    def is_publicly_visible(self, now: datetime) -> bool:
        """Publication gate: published status and a publish time that has elapsed."""
        if self.status is not ArticleStatus.PUBLISHED or self.published_at is None:
            return False
        return as_utc(self.published_at) <= as_utc(now)

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


@dataclass
class SitemapEntry:
    slug: str
    updated_at: datetime
