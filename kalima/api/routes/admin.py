"""
Authoring API: articles (drafts included), static pages, category copies,
reader suggestions and image lookup. Every endpoint requires isAdmin.
"""

from fastapi import APIRouter, Depends, Query, status

from kalima.dependencies import require_admin
from kalima.models.category import Category
from kalima.models.static_page import StaticPage
from kalima.models.user import UserProfile
from kalima.schemas.article import ArticleCreateSchema, ArticleResponse, ArticleUpdateSchema
from kalima.schemas.static_page import StaticPageCreateSchema, StaticPageUpdateSchema
from kalima.services.content_admin import content_admin_service
from kalima.services.content_query import ArticleFilter, content_query_service
from kalima.services.favorites import PendingSuggestion, pending_suggestions, profile_service
from kalima.services.image_search import image_search_service

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"])


# ============================================
# ARTICLES
# ============================================

@router.get("/articles", response_model=list[ArticleResponse])
async def list_articles(
    drafts_only: bool = Query(False, alias="draftsOnly"),
    admin: UserProfile = Depends(require_admin),
):
    articles = await content_query_service.query(ArticleFilter(draft=True if drafts_only else None))
    return [ArticleResponse.model_validate(a) for a in articles]


@router.post("/articles", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(payload: ArticleCreateSchema, admin: UserProfile = Depends(require_admin)):
    """Validate every declared translation, then store. The slug defaults to the English title."""
    article = await content_admin_service.create_article(payload)
    return ArticleResponse.model_validate(article)


@router.get("/articles/{article_id}", response_model=ArticleResponse)
async def get_article(article_id: str, admin: UserProfile = Depends(require_admin)):
    return ArticleResponse.model_validate(await content_admin_service.get_article(article_id))


@router.put("/articles/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    payload: ArticleUpdateSchema,
    admin: UserProfile = Depends(require_admin),
):
    article = await content_admin_service.update_article(article_id, payload)
    return ArticleResponse.model_validate(article)


@router.delete("/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: str, admin: UserProfile = Depends(require_admin)):
    await content_admin_service.delete_article(article_id)


# ============================================
# STATIC PAGES
# ============================================

@router.get("/pages", response_model=list[StaticPage])
async def list_pages(admin: UserProfile = Depends(require_admin)):
    return await content_query_service.list_static_pages(include_drafts=True)


@router.post("/pages", response_model=StaticPage, status_code=status.HTTP_201_CREATED)
async def create_page(payload: StaticPageCreateSchema, admin: UserProfile = Depends(require_admin)):
    return await content_admin_service.create_static_page(payload)


@router.get("/pages/{page_id}", response_model=StaticPage)
async def get_page(page_id: str, admin: UserProfile = Depends(require_admin)):
    return await content_admin_service.get_static_page(page_id)


@router.put("/pages/{page_id}", response_model=StaticPage)
async def update_page(
    page_id: str,
    payload: StaticPageUpdateSchema,
    admin: UserProfile = Depends(require_admin),
):
    return await content_admin_service.update_static_page(page_id, payload)


@router.delete("/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(page_id: str, admin: UserProfile = Depends(require_admin)):
    await content_admin_service.delete_static_page(page_id)


# ============================================
# CATEGORIES
# ============================================

@router.get("/categories", response_model=list[Category])
async def list_categories(admin: UserProfile = Depends(require_admin)):
    """Firestore copies of the category tree"""
    return await content_admin_service.list_category_documents()


@router.put("/categories/{category_slug}", response_model=Category)
async def save_category(
    category_slug: str,
    category: Category,
    admin: UserProfile = Depends(require_admin),
):
    return await content_admin_service.save_category(category.model_copy(update={"slug": category_slug}))


@router.post("/categories/seed", response_model=list[Category])
async def seed_categories(admin: UserProfile = Depends(require_admin)):
    """Write a copy of every category of the static tree"""
    return await content_admin_service.seed_categories()


# ============================================
# SUGGESTIONS
# ============================================

@router.get("/suggestions", response_model=list[PendingSuggestion])
async def list_suggestions(admin: UserProfile = Depends(require_admin)):
    profiles = await profile_service.list_profiles()
    return pending_suggestions(profiles)


@router.delete("/suggestions/{uid}/{index}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_suggestion(uid: str, index: int, admin: UserProfile = Depends(require_admin)):
    await profile_service.delete_suggestion(uid, index)


# ============================================
# IMAGES
# ============================================

@router.get("/images/random")
async def random_image(q: str = Query(..., min_length=1), admin: UserProfile = Depends(require_admin)):
    """Random Unsplash photo for a keyword; falls back to a fixed image"""
    return {"url": await image_search_service.random_photo(q)}
