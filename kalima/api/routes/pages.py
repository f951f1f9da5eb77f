"""Static pages API routes"""

from fastapi import APIRouter, Depends

from kalima.dependencies import get_request_language
from kalima.exceptions import ContentNotFoundError
from kalima.models.language import Language
from kalima.schemas.static_page import LocalizedPageResponse
from kalima.services.content_query import content_query_service
from kalima.services.presenters import localize_page

router = APIRouter(prefix="/api/v1/pages", tags=["Pages"])


@router.get("/", response_model=list[LocalizedPageResponse])
async def list_pages(language: Language = Depends(get_request_language)):
    """Published static pages (footer links)"""
    pages = await content_query_service.list_static_pages()
    return [item for item in (localize_page(page, language) for page in pages) if item is not None]


@router.get("/{slug}", response_model=LocalizedPageResponse)
async def get_page(slug: str, language: Language = Depends(get_request_language)):
    page = await content_query_service.get_static_page_by_slug(slug)
    if page is None or page.draft:
        raise ContentNotFoundError("page", slug)
    localized = localize_page(page, language)
    if localized is None:
        raise ContentNotFoundError("page", slug)
    return localized
