"""
Content query layer.

Firestore can filter on draft state but not on nested translation fields,
so category/subcategory/language refinements and ordering run in memory
after the fetch.
"""

import logging
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel

from kalima.config import settings
from kalima.exceptions import FetchFailureError
from kalima.models.article import Article, firestore_article_to_model
from kalima.models.language import Language
from kalima.models.static_page import StaticPage, firestore_page_to_model
from kalima.services.firebase_service import ARTICLES, STATIC_PAGES, FirebaseService, firebase_service
from kalima.utils.timestamps import sort_key

logger = logging.getLogger(__name__)


class ArticleFilter(BaseModel):
    category: Optional[str] = None
    subcategory: Optional[str] = None
    language: Optional[str] = None
    draft: Optional[bool] = None


def _language_code(language: Union[Language, str, None]) -> Optional[str]:
    if language is None:
        return None
    return language.value if isinstance(language, Language) else str(language)


def matches_taxonomy(article: Article, category: Optional[str], subcategory: Optional[str]) -> bool:
    """
    Exact match on the legacy top-level fields or on ANY translation.

    Articles may be filed differently per language, so a translation other
    than the one being displayed can make the article match.
    """
    if not category and not subcategory:
        return True

    def _pair_matches(cat: Optional[str], sub: Optional[str]) -> bool:
        if category and cat != category:
            return False
        if subcategory and sub != subcategory:
            return False
        return True

    if _pair_matches(article.category, article.subcategory):
        return True
    return any(
        _pair_matches(translation.category, translation.subcategory)
        for translation in article.translations.values()
    )


def matches_language(article: Article, language: Optional[str]) -> bool:
    if not language or not article.available_languages:
        return True
    return language in article.available_languages


def sort_newest_first(entities: Iterable[Any]) -> list:
    """createdAt descending; undated entities sort as the epoch. Stable."""
    return sorted(entities, key=lambda e: sort_key(getattr(e, "created_at", None)), reverse=True)


def matches_search(article: Article, needle: str, language: str) -> bool:
    """Case-insensitive substring search in the requested language only"""
    translation = article.translations.get(language)
    if translation is None:
        return False
    if needle in (translation.title or "").lower():
        return True
    if needle in (translation.summary or "").lower():
        return True
    for section in translation.content:
        if section.title and needle in section.title.lower():
            return True
        if needle in (section.paragraph or "").lower():
            return True
    return False


class ContentQueryService:
    """Fetch-and-refine queries over articles and static pages"""

    def __init__(self, store: Optional[FirebaseService] = None):
        self.store = store or firebase_service

    async def _fetch(self, collection_name: str, filters: Optional[list] = None, operation: str = "query"):
        try:
            return await self.store.query_collection(collection_name, filters=filters)
        except Exception as e:
            logger.error(f"Error during {operation} on '{collection_name}': {e}")
            raise FetchFailureError(operation, e) from e

    @staticmethod
    def _to_articles(docs: list) -> list[Article]:
        articles = []
        for doc_id, data in docs:
            try:
                articles.append(firestore_article_to_model(data, doc_id))
            except ValueError as e:
                logger.warning(f"Skipping malformed article {doc_id}: {e}")
        return articles

    async def query(self, article_filter: Optional[ArticleFilter] = None) -> list[Article]:
        """
        Articles matching the filter, newest first.

        Args:
            article_filter: optional category / subcategory / language / draft

        Raises:
            FetchFailureError: when the store call fails
        """
        article_filter = article_filter or ArticleFilter()
        filters = []
        if article_filter.draft is not None:
            filters.append(("draft", "==", article_filter.draft))

        docs = await self._fetch(ARTICLES, filters or None, operation="list articles")
        language = _language_code(article_filter.language)
        articles = [
            article for article in self._to_articles(docs)
            if matches_language(article, language)
            and matches_taxonomy(article, article_filter.category, article_filter.subcategory)
        ]
        return sort_newest_first(articles)

    async def search(
        self,
        text: str,
        language: Union[Language, str],
        include_drafts: bool = False,
    ) -> list[Article]:
        """Public search; queries shorter than the minimum return nothing"""
        needle = (text or "").strip().lower()
        if len(needle) < settings.SEARCH_MIN_QUERY_LENGTH:
            return []
        code = _language_code(language)
        candidates = await self.query(ArticleFilter(
            language=code,
            draft=None if include_drafts else False,
        ))
        return [article for article in candidates if matches_search(article, needle, code)]

    async def get_article_by_slug(self, slug: str) -> Optional[Article]:
        """Look up by document id first, then by the slug field"""
        try:
            data = await self.store.get_document(ARTICLES, slug)
        except Exception as e:
            logger.error(f"Error getting article by id '{slug}': {e}")
            raise FetchFailureError("get article", e) from e
        if data is not None:
            try:
                return firestore_article_to_model(data, slug)
            except ValueError as e:
                logger.warning(f"Skipping malformed article {slug}: {e}")
                return None

        docs = await self._fetch(ARTICLES, [("slug", "==", slug)], operation="get article by slug")
        articles = self._to_articles(docs)
        return articles[0] if articles else None

    async def get_articles_by_ids(self, ids: Iterable[str]) -> list[Article]:
        wanted = set(ids)
        if not wanted:
            return []
        docs = await self._fetch(ARTICLES, operation="list articles")
        return [article for article in self._to_articles(docs) if article.id in wanted]

    async def list_static_pages(self, include_drafts: bool = False) -> list[StaticPage]:
        # Older pages have no "draft" field, which an equality predicate
        # would drop, so drafts are filtered in memory
        docs = await self._fetch(STATIC_PAGES, operation="list static pages")
        pages = []
        for doc_id, data in docs:
            try:
                page = firestore_page_to_model(data, doc_id)
            except ValueError as e:
                logger.warning(f"Skipping malformed static page {doc_id}: {e}")
                continue
            if include_drafts or not page.draft:
                pages.append(page)
        return pages

    async def get_static_page_by_slug(self, slug: str) -> Optional[StaticPage]:
        docs = await self._fetch(STATIC_PAGES, [("slug", "==", slug)], operation="get static page")
        for doc_id, data in docs:
            try:
                return firestore_page_to_model(data, doc_id)
            except ValueError as e:
                logger.warning(f"Skipping malformed static page {doc_id}: {e}")
        return None


content_query_service = ContentQueryService()
