"""Public read endpoints: home listing, article pages, archives, search."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from newsroom.application.schemas import (
    ArticlePageResponse,
    CategoryArchiveResponse,
    CategoryResponse,
    PublicArticleResponse,
    TagResponse,
)
from newsroom.application.services import PublicService
from newsroom.domain.exceptions import EntityNotFoundError
from newsroom.infrastructure.dependencies import get_public_service

router = APIRouter(tags=["Public"])


@router.get("/articles", response_model=ArticlePageResponse)
async def list_articles(
    page: int = Query(1, ge=1),
    service: PublicService = Depends(get_public_service),
) -> ArticlePageResponse:
    """Published articles, newest first."""
    result = await service.home(page)
    return ArticlePageResponse.model_validate(result, from_attributes=True)


@router.get("/articles/{slug}", response_model=PublicArticleResponse)
async def get_article(
    slug: str,
    service: PublicService = Depends(get_public_service),
) -> PublicArticleResponse:
    """A single published article with SEO fields. Each call counts as a view."""
    try:
        result = await service.get_article(slug)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PublicArticleResponse.model_validate(result, from_attributes=True)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    service: PublicService = Depends(get_public_service),
) -> list[CategoryResponse]:
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.get("/categories/{slug}", response_model=CategoryArchiveResponse)
async def category_archive(
    slug: str,
    page: int = Query(1, ge=1),
    service: PublicService = Depends(get_public_service),
) -> CategoryArchiveResponse:
    """A category and one page of its published articles."""
    try:
        result = await service.category_archive(slug, page)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return CategoryArchiveResponse.model_validate(result, from_attributes=True)


@router.get("/search", response_model=ArticlePageResponse)
async def search(
    q: str = Query("", max_length=500),
    page: int = Query(1, ge=1),
    service: PublicService = Depends(get_public_service),
) -> ArticlePageResponse:
    """Relevance-ranked search over published articles. An empty query returns no results."""
    result = await service.search(q, page)
    return ArticlePageResponse.model_validate(result, from_attributes=True)


@router.get("/tags", response_model=list[TagResponse])
async def list_tags(
    service: PublicService = Depends(get_public_service),
) -> list[TagResponse]:
    tags = await service.list_tags()
    return [TagResponse.model_validate(t, from_attributes=True) for t in tags]
