"""Category tree API routes"""

from fastapi import APIRouter, Depends

from kalima.dependencies import get_request_language
from kalima.exceptions import ContentNotFoundError
from kalima.models.language import Language
from kalima.schemas.article import ArticleListResponse
from kalima.schemas.view import ViewState
from kalima.services.content_query import ArticleFilter, content_query_service
from kalima.services.presenters import localize_articles
from kalima.services.taxonomy import LocalizedCategory, taxonomy

router = APIRouter(prefix="/api/v1/categories", tags=["Categories"])


@router.get("/", response_model=list[LocalizedCategory])
async def list_categories(language: Language = Depends(get_request_language)):
    """The full two-level tree with display names"""
    return taxonomy.localized_tree(language)


@router.get("/{category_slug}", response_model=LocalizedCategory)
async def get_category(category_slug: str, language: Language = Depends(get_request_language)):
    category = taxonomy.category_by_slug(category_slug)
    if category is None:
        raise ContentNotFoundError("category", category_slug, parent_path="/categories")
    return taxonomy.localize(category, language)


async def _articles_response(category_slug: str, subcategory_slug, language: Language) -> ArticleListResponse:
    articles = await content_query_service.query(ArticleFilter(
        category=category_slug,
        subcategory=subcategory_slug,
        language=language.value,
        draft=False,
    ))
    localized = localize_articles(articles, language)
    return ArticleListResponse(
        articles=localized,
        total=len(localized),
        state=ViewState.READY.value if localized else ViewState.EMPTY.value,
    )


@router.get("/{category_slug}/articles", response_model=ArticleListResponse)
async def category_articles(category_slug: str, language: Language = Depends(get_request_language)):
    """Published articles filed under the category in any translation"""
    if taxonomy.category_by_slug(category_slug) is None:
        raise ContentNotFoundError("category", category_slug, parent_path="/categories")
    return await _articles_response(category_slug, None, language)


@router.get("/{category_slug}/{subcategory_slug}/articles", response_model=ArticleListResponse)
async def subcategory_articles(
    category_slug: str,
    subcategory_slug: str,
    language: Language = Depends(get_request_language),
):
    if taxonomy.category_by_slug(category_slug) is None:
        raise ContentNotFoundError("category", category_slug, parent_path="/categories")
    if taxonomy.subcategory_by_slug(category_slug, subcategory_slug) is None:
        raise ContentNotFoundError(
            "subcategory", subcategory_slug, parent_path=f"/categories/{category_slug}")
    return await _articles_response(category_slug, subcategory_slug, language)
