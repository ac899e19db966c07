"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from newsroom.domain.entities import ArticleStatus
from newsroom.domain.text import strip_tags


class ArticleForm(BaseModel):
    """Submitted article fields, validated once at the boundary.

    ``status`` is kept as the raw submitted string; the lifecycle service
    owns the normalisation policy. ``tags`` is the complete tag set for the
    article and replaces whatever was associated before.
    """

    title: str = Field(..., min_length=1, max_length=255, examples=["Hello, World! 2024"])
    slug: str = Field("", max_length=255, description="Explicit slug; honoured on edit only")
    excerpt: str = ""
    body: str = ""
    category_id: int | None = None
    status: str = "draft"
    published_at: datetime | None = None
    scheduled_at: datetime | None = None
    meta_title: str = Field("", max_length=255)
    meta_description: str = Field("", max_length=500)
    tags: list[int] = Field(default_factory=list)

    @field_validator("title", "excerpt", "meta_title", "meta_description", mode="before")
    @classmethod
    def strip_markup(cls, v: object) -> object:
        if isinstance(v, str):
            return " ".join(strip_tags(v).split())
        return v

    @field_validator("slug", "status", mode="before")
    @classmethod
    def trim(cls, v: object) -> object:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("published_at", "scheduled_at", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("category_id", mode="before")
    @classmethod
    def no_category(cls, v: object) -> object:
        """Blank and ``0`` both mean "uncategorised"."""
        if isinstance(v, str):
            v = v.strip()
            if v in ("", "0"):
                return None
        if v == 0:
            return None
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: object) -> object:
        if v is None or v == "":
            return []
        if isinstance(v, (str, int)):
            v = [v]
        return [t for t in v if t not in ("", None)]


class TagRef(BaseModel):
    id: int | None = None
    name: str
    slug: str

    model_config = {"from_attributes": True}


class ArticleSummaryResponse(BaseModel):
    """Listing row — no body."""

    id: int
    title: str
    slug: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: ArticleStatus
    published_at: datetime | None = None
    reading_time: int
    view_count: int
    category_name: str | None = None
    category_slug: str | None = None
    author: str | None = None
    relevance: float | None = None
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleResponse(ArticleSummaryResponse):
    """Full article as returned to the back office."""

    body: str
    category_id: int | None = None
    admin_id: int | None = None
    scheduled_at: datetime | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    created_at: datetime
    tags: list[TagRef] = Field(default_factory=list)
    tag_ids: list[int] = Field(default_factory=list)


class SeoResponse(BaseModel):
    page_title: str
    meta_description: str
    canonical_url: str

    model_config = {"from_attributes": True}


class PublicArticleResponse(BaseModel):
    """Public article view with SEO fields resolved from their fallbacks."""

    article: ArticleResponse
    seo: SeoResponse

    model_config = {"from_attributes": True}


class ArticlePageResponse(BaseModel):
    items: list[ArticleSummaryResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
    has_prev: bool
    has_next: bool

    model_config = {"from_attributes": True}
