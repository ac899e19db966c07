"""Back-office category and tag management."""

from fastapi import APIRouter, Depends, HTTPException, status

from newsroom.application.schemas import CategoryCreate, CategoryResponse, TagCreate, TagResponse
from newsroom.application.services import CategoryService, TagService
from newsroom.domain.exceptions import EntityNotFoundError
from newsroom.infrastructure.dependencies import (
    get_category_service,
    get_current_admin,
    get_tag_service,
)

router = APIRouter(prefix="/admin", dependencies=[Depends(get_current_admin)])


# ── Categories ──────────────────────────────────────────────────────


@router.get("/categories", response_model=list[CategoryResponse], tags=["Admin: Categories"])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Admin: Categories"],
)
async def create_category(
    data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a category; its slug is derived from the name and made unique."""
    category = await service.create_category(data)
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Admin: Categories"],
)
async def delete_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> None:
    """Delete a category. Its articles are kept and become uncategorised."""
    try:
        await service.delete_category(category_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Tags ────────────────────────────────────────────────────────────


@router.get("/tags", response_model=list[TagResponse], tags=["Admin: Tags"])
async def list_tags(service: TagService = Depends(get_tag_service)) -> list[TagResponse]:
    tags = await service.list_tags()
    return [TagResponse.model_validate(t, from_attributes=True) for t in tags]


@router.post(
    "/tags",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Admin: Tags"],
)
async def create_tag(
    data: TagCreate,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.create_tag(data)
    return TagResponse.model_validate(tag, from_attributes=True)


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Admin: Tags"])
async def delete_tag(
    tag_id: int,
    service: TagService = Depends(get_tag_service),
) -> None:
    """Delete a tag and detach it from every article."""
    try:
        await service.delete_tag(tag_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
