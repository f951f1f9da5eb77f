"""Favorites API routes"""

from fastapi import APIRouter, Depends

from kalima.dependencies import get_current_user, get_request_language
from kalima.exceptions import ContentNotFoundError
from kalima.models.language import Language
from kalima.models.user import UserProfile
from kalima.schemas.article import ArticleListResponse, FavoriteToggleResponse
from kalima.services.content_query import content_query_service
from kalima.services.favorites import favorites_of, profile_service
from kalima.services.presenters import localize_articles

router = APIRouter(prefix="/api/v1/favorites", tags=["Favorites"])


@router.get("/", response_model=ArticleListResponse)
async def list_favorites(
    current_user: UserProfile = Depends(get_current_user),
    language: Language = Depends(get_request_language),
):
    """Favorite articles in store order"""
    entities = await content_query_service.get_articles_by_ids(current_user.favorites)
    view = favorites_of(current_user, entities)
    localized = localize_articles(view.articles, language)
    return ArticleListResponse(articles=localized, total=len(localized), state=view.state.value)


@router.post("/{article_id}", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    article_id: str,
    current_user: UserProfile = Depends(get_current_user),
):
    """Add the article to favorites, or remove it if already there"""
    if article_id not in current_user.favorites:
        article = await content_query_service.get_article_by_slug(article_id)
        if article is None:
            raise ContentNotFoundError("article", article_id)
        article_id = article.id
    favorite = await profile_service.toggle_favorite(current_user, article_id)
    return FavoriteToggleResponse(article_id=article_id, favorite=favorite)
