"""Pydantic DTOs for categories and tags."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from newsroom.application.schemas.article import ArticlePageResponse
from newsroom.domain.text import strip_tags


def _clean(v: object) -> object:
    if isinstance(v, str):
        return " ".join(strip_tags(v).split())
    return v


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120, examples=["Analysis"])
    description: str | None = Field(None, max_length=1000)

    @field_validator("name", "description", mode="before")
    @classmethod
    def clean_fields(cls, v: object) -> object:
        return _clean(v)


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=80, examples=["Elections"])

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v: object) -> object:
        return _clean(v)


class TagResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CategoryArchiveResponse(BaseModel):
    """A category with one page of its visible articles."""

    category: CategoryResponse
    articles: ArticlePageResponse

    model_config = {"from_attributes": True}
