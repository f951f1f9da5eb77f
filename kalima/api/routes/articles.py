"""Articles API routes"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from kalima.dependencies import get_request_language
from kalima.exceptions import ContentNotFoundError
from kalima.models.language import Language
from kalima.schemas.article import ArticleListResponse, LocalizedArticleResponse
from kalima.schemas.view import ViewState
from kalima.services.content_query import ArticleFilter, content_query_service
from kalima.services.presenters import localize_article, localize_articles


router = APIRouter(prefix="/api/v1/articles", tags=["Articles"])


@router.get("/", response_model=ArticleListResponse)
async def list_articles(
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
    all_languages: bool = Query(False, alias="allLanguages"),
    language: Language = Depends(get_request_language),
):
    """
    Published articles, newest first, projected into the request language

    By default only articles available in that language are listed;
    `allLanguages=true` lists every article with fallback translations.
    """
    articles = await content_query_service.query(ArticleFilter(
        category=category,
        subcategory=subcategory,
        language=None if all_languages else language.value,
        draft=False,
    ))
    localized = localize_articles(articles, language)
    return ArticleListResponse(
        articles=localized,
        total=len(localized),
        state=ViewState.READY.value if localized else ViewState.EMPTY.value,
    )


@router.get("/{slug}", response_model=LocalizedArticleResponse)
async def get_article(slug: str, language: Language = Depends(get_request_language)):
    """Article by slug (or document id) in the request language"""
    article = await content_query_service.get_article_by_slug(slug)
    if article is None or article.draft:
        raise ContentNotFoundError("article", slug)
    localized = localize_article(article, language)
    if localized is None:
        raise ContentNotFoundError("article", slug)
    return localized
