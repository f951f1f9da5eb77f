"""Project stored entities into single-language response models"""

from typing import Iterable, Optional, Union

from kalima.models.article import Article
from kalima.models.language import Language
from kalima.models.static_page import StaticPage
from kalima.schemas.article import LocalizedArticleResponse
from kalima.schemas.static_page import LocalizedPageResponse
from kalima.services.translation_resolver import resolve


def localize_article(article: Article, language: Union[Language, str]) -> Optional[LocalizedArticleResponse]:
    view = resolve(article, language)
    if view is None:
        return None
    translation = view.translation
    return LocalizedArticleResponse(
        id=article.id,
        slug=article.slug,
        language=view.language,
        requested_language=view.requested_language,
        is_fallback=view.is_fallback,
        available_languages=article.available_languages,
        title=translation.title,
        summary=translation.summary,
        category=translation.category or article.category,
        subcategory=translation.subcategory or article.subcategory,
        keywords=translation.keywords,
        content=[section.model_dump() for section in translation.content],
        image_url=article.image_url,
        created_at=article.created_at,
    )


def localize_articles(articles: Iterable[Article], language: Union[Language, str]) -> list[LocalizedArticleResponse]:
    """Articles without any translation are left out of listings"""
    localized = []
    for article in articles:
        item = localize_article(article, language)
        if item is not None:
            localized.append(item)
    return localized


def localize_page(page: StaticPage, language: Union[Language, str]) -> Optional[LocalizedPageResponse]:
    view = resolve(page, language)
    if view is None:
        return None
    translation = view.translation
    return LocalizedPageResponse(
        id=page.id,
        slug=page.slug,
        language=view.language,
        requested_language=view.requested_language,
        is_fallback=view.is_fallback,
        available_languages=page.available_languages,
        title=translation.title,
        content=translation.content,
        keywords=translation.keywords,
        meta_description=translation.meta_description,
    )
