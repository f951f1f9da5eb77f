"""
Public URL surface: view payloads for site paths, and sitemap.xml
"""

import logging
from fastapi import APIRouter, Depends, Query, Response
from typing import Optional

from kalima.config import settings
from kalima.exceptions import FetchFailureError
from kalima.dependencies import get_language_preference, get_optional_user
from kalima.models.language import Language
from kalima.models.user import UserProfile
from kalima.schemas.view import ViewResponse
from kalima.services.content_query import ArticleFilter, content_query_service
from kalima.services.sitemap import generate_sitemap
from kalima.services.views import view_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Views"])


@router.get("/api/v1/view", response_model=ViewResponse, response_model_exclude_none=True)
async def render_view(
    path: str = Query("/", description="Site path, e.g. /fr/categories/culture"),
    current_user: Optional[UserProfile] = Depends(get_optional_user),
    preferred_language: Language = Depends(get_language_preference),
):
    """
    Resolve a site path to its view payload

    The payload always carries a state (loading, empty, ready, error,
    not_found, redirect). When `rewritten` is true the client replaces
    its current history entry with `canonicalPath`.
    """
    return await view_service.render(path, current_user, preferred_language)


@router.get("/sitemap.xml", response_class=Response)
async def sitemap():
    """Fixed routes are always listed; dynamic entries are skipped if the store fails"""
    pages, articles = [], []
    try:
        pages = await content_query_service.list_static_pages()
        articles = await content_query_service.query(ArticleFilter(draft=False))
    except FetchFailureError as e:
        logger.error(f"Error generating sitemap: {e}")
    xml = generate_sitemap(settings.SITE_BASE_URL, pages, articles)
    return Response(content=xml, media_type="application/xml")
