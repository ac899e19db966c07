"""Back-office article endpoints. Writes accept multipart forms so a featured
image can travel with the article fields."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from newsroom.application.interfaces import ImageUpload
from newsroom.application.schemas import ArticleForm, ArticlePageResponse, ArticleResponse
from newsroom.application.services import ArticleService
from newsroom.domain.entities import Admin
from newsroom.domain.exceptions import EntityNotFoundError
from newsroom.infrastructure.dependencies import get_article_service, get_current_admin

router = APIRouter(
    prefix="/admin/articles",
    tags=["Admin: Articles"],
    dependencies=[Depends(get_current_admin)],
)


def article_form(
    title: str = Form(""),
    slug: str = Form(""),
    excerpt: str = Form(""),
    body: str = Form(""),
    category_id: str = Form(""),
    article_status: str = Form("draft", alias="status"),
    published_at: str = Form(""),
    scheduled_at: str = Form(""),
    meta_title: str = Form(""),
    meta_description: str = Form(""),
    tags: list[str] = Form([]),
) -> ArticleForm:
    """Collect the submitted form fields into a validated ArticleForm."""
    try:
        return ArticleForm(
            title=title,
            slug=slug,
            excerpt=excerpt,
            body=body,
            category_id=category_id,
            status=article_status,
            published_at=published_at,
            scheduled_at=scheduled_at,
            meta_title=meta_title,
            meta_description=meta_description,
            tags=tags,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())


async def _image_upload(image: UploadFile | None) -> ImageUpload | None:
    if image is None or not image.filename:
        return None
    content = await image.read()
    if not content:
        return None
    return ImageUpload(content=content, filename=image.filename, content_type=image.content_type)


@router.get("", response_model=ArticlePageResponse)
async def list_articles(
    page: int = Query(1, ge=1),
    status_filter: str | None = Query(None, alias="status"),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Every article regardless of status, most recently updated first."""
    result = await service.list_admin(page, status_filter)
    return ArticlePageResponse.model_validate(result, from_attributes=True)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.get_for_edit(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    form: ArticleForm = Depends(article_form),
    image: UploadFile | None = File(None),
    admin: Admin = Depends(get_current_admin),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create an article; the slug is derived from the title."""
    article = await service.create_article(form, admin.id, await _image_upload(image))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    form: ArticleForm = Depends(article_form),
    image: UploadFile | None = File(None),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Replace an article's fields and tag set. Omitting the image keeps the current one."""
    try:
        article = await service.update_article(article_id, form, await _image_upload(image))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> None:
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
