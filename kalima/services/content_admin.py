"""
Authoring operations: articles, static pages and the Firestore copy of
the category tree.

Every save is validated before it reaches the store. Updates replace the
whole document (keeping createdAt) with no version check; two admins
editing the same document overwrite each other (last write wins).
"""

import logging
from typing import Any, Dict, Optional

from kalima.exceptions import ContentNotFoundError, FetchFailureError, TranslationValidationError
from kalima.models.article import Article, ArticleTranslation, firestore_article_to_model
from kalima.models.category import Category, category_model_to_firestore, firestore_category_to_model
from kalima.models.language import SUPPORTED_LANGUAGES
from kalima.models.static_page import PageTranslation, StaticPage, firestore_page_to_model
from kalima.schemas.article import ArticleCreateSchema, ArticleUpdateSchema
from kalima.schemas.static_page import StaticPageCreateSchema, StaticPageUpdateSchema
from kalima.services.content_query import ContentQueryService
from kalima.services.firebase_service import (
    ARTICLES,
    CATEGORIES,
    STATIC_PAGES,
    FirebaseService,
    firebase_service,
)
from kalima.services.taxonomy import Taxonomy, taxonomy as default_taxonomy
from kalima.utils.slugs import is_valid_slug, slugify, unique_slug
from kalima.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


def _check_languages(available_languages: list[str], translations: Dict[str, Any]) -> list[str]:
    problems = []
    if not available_languages:
        problems.append("availableLanguages: at least one language is required")
    for code in available_languages:
        if code not in SUPPORTED_LANGUAGES:
            problems.append(f"availableLanguages: unsupported language '{code}'")
        elif code not in translations:
            problems.append(f"translations.{code}: missing translation")
    if len(set(available_languages)) != len(available_languages):
        problems.append("availableLanguages: duplicate language")
    return problems


def validate_article(
    slug: str,
    available_languages: list[str],
    translations: Dict[str, ArticleTranslation],
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    taxonomy: Taxonomy = default_taxonomy,
) -> None:
    """
    Raise TranslationValidationError unless every declared language has a
    complete translation filed under a known category/subcategory.
    """
    problems = []
    if not is_valid_slug(slug):
        problems.append(f"slug: '{slug}' is not a valid slug")
    problems.extend(_check_languages(available_languages, translations))

    for code in available_languages:
        translation = translations.get(code)
        if translation is None:
            continue
        prefix = f"translations.{code}"
        if not translation.title.strip():
            problems.append(f"{prefix}.title: required")
        if not translation.summary.strip():
            problems.append(f"{prefix}.summary: required")
        if not any(section.paragraph.strip() for section in translation.content):
            problems.append(f"{prefix}.content: at least one paragraph is required")

        cat = translation.category or category
        sub = translation.subcategory or subcategory
        if not cat or not sub:
            problems.append(f"{prefix}: category and subcategory are required")
        elif taxonomy.subcategory_by_slug(cat, sub) is None:
            problems.append(f"{prefix}: unknown category '{cat}/{sub}'")

    if problems:
        raise TranslationValidationError(problems)


def validate_static_page(slug: str, available_languages: list[str], translations: Dict[str, PageTranslation]) -> None:
    problems = []
    if not is_valid_slug(slug):
        problems.append(f"slug: '{slug}' is not a valid slug")
    problems.extend(_check_languages(available_languages, translations))
    for code in available_languages:
        translation = translations.get(code)
        if translation is None:
            continue
        if not translation.title.strip():
            problems.append(f"translations.{code}.title: required")
        if not translation.content.strip():
            problems.append(f"translations.{code}.content: required")
    if problems:
        raise TranslationValidationError(problems)


class ContentAdminService:
    def __init__(
        self,
        store: Optional[FirebaseService] = None,
        query_service: Optional[ContentQueryService] = None,
        taxonomy: Taxonomy = default_taxonomy,
    ):
        self.store = store or firebase_service
        self.query_service = query_service or ContentQueryService(self.store)
        self.taxonomy = taxonomy

    async def _write(self, operation: str, coro):
        try:
            return await coro
        except Exception as e:
            logger.error(f"Error during {operation}: {e}")
            raise FetchFailureError(operation, e) from e

    # ============================================
    # ARTICLES
    # ============================================

    async def _existing_slugs(self, collection_name: str) -> set[str]:
        docs = await self._write(
            f"list {collection_name}", self.store.query_collection(collection_name))
        return {data.get("slug") for _, data in docs if data.get("slug")}

    async def _check_renamed_slug(self, collection_name: str, current: str, requested: Optional[str]) -> None:
        if requested and requested != current and requested in await self._existing_slugs(collection_name):
            raise TranslationValidationError([f"slug: '{requested}' is already in use"])

    async def create_article(self, payload: ArticleCreateSchema) -> Article:
        slug = payload.slug
        if not slug:
            english = payload.translations.get("en")
            first = next(iter(payload.translations.values()), None)
            source = english or first
            slug = unique_slug(
                slugify(source.title if source else ""),
                await self._existing_slugs(ARTICLES),
            )
        elif slug in await self._existing_slugs(ARTICLES):
            raise TranslationValidationError([f"slug: '{slug}' is already in use"])

        validate_article(
            slug,
            payload.available_languages,
            payload.translations,
            payload.category,
            payload.subcategory,
            self.taxonomy,
        )

        data = {
            "slug": slug,
            "availableLanguages": payload.available_languages,
            "translations": {
                code: translation.model_dump() for code, translation in payload.translations.items()
            },
            "draft": payload.draft,
            "imageUrl": payload.image_url,
            "createdAt": utc_now(),
        }
        if payload.category:
            data["category"] = payload.category
        if payload.subcategory:
            data["subcategory"] = payload.subcategory

        doc_id = await self._write("create article", self.store.add_document(ARTICLES, data))
        logger.info(f"Created article {doc_id} ({slug})")
        return firestore_article_to_model(data, doc_id)

    async def get_article(self, article_id: str) -> Article:
        data = await self._write("get article", self.store.get_document(ARTICLES, article_id))
        if data is None:
            raise ContentNotFoundError("article", article_id, parent_path="/admin/articles")
        return firestore_article_to_model(data, article_id)

    async def update_article(self, article_id: str, payload: ArticleUpdateSchema) -> Article:
        existing = await self.get_article(article_id)
        await self._check_renamed_slug(ARTICLES, existing.slug, payload.slug)
        merged = existing.model_copy(update={
            key: value
            for key, value in {
                "slug": payload.slug,
                "available_languages": payload.available_languages,
                "translations": payload.translations,
                "draft": payload.draft,
                "image_url": payload.image_url,
                "category": payload.category,
                "subcategory": payload.subcategory,
            }.items()
            if value is not None
        })

        validate_article(
            merged.slug,
            merged.available_languages,
            merged.translations,
            merged.category,
            merged.subcategory,
            self.taxonomy,
        )

        data = {
            "slug": merged.slug,
            "availableLanguages": merged.available_languages,
            "translations": {
                code: translation.model_dump() for code, translation in merged.translations.items()
            },
            "draft": merged.draft,
            "imageUrl": merged.image_url,
            "updatedAt": utc_now(),
        }
        if existing.created_at is not None:
            data["createdAt"] = existing.created_at
        if merged.category:
            data["category"] = merged.category
        if merged.subcategory:
            data["subcategory"] = merged.subcategory

        await self._write("update article", self.store.set_document(ARTICLES, article_id, data, merge=False))
        logger.info(f"Updated article {article_id}")
        return merged

    async def delete_article(self, article_id: str) -> None:
        await self.get_article(article_id)
        await self._write("delete article", self.store.delete_document(ARTICLES, article_id))
        logger.info(f"Deleted article {article_id}")

    # ============================================
    # STATIC PAGES
    # ============================================

    async def create_static_page(self, payload: StaticPageCreateSchema) -> StaticPage:
        if payload.slug in await self._existing_slugs(STATIC_PAGES):
            raise TranslationValidationError([f"slug: '{payload.slug}' is already in use"])
        validate_static_page(payload.slug, payload.available_languages, payload.translations)

        now = utc_now()
        data = {
            "slug": payload.slug,
            "availableLanguages": payload.available_languages,
            "translations": {
                code: translation.model_dump(by_alias=True, exclude_none=True)
                for code, translation in payload.translations.items()
            },
            "draft": payload.draft,
            "createdAt": now,
            "updatedAt": now,
        }
        doc_id = await self._write("create static page", self.store.add_document(STATIC_PAGES, data))
        logger.info(f"Created static page {doc_id} ({payload.slug})")
        return firestore_page_to_model(data, doc_id)

    async def get_static_page(self, page_id: str) -> StaticPage:
        data = await self._write("get static page", self.store.get_document(STATIC_PAGES, page_id))
        if data is None:
            raise ContentNotFoundError("page", page_id, parent_path="/admin/pages")
        return firestore_page_to_model(data, page_id)

    async def update_static_page(self, page_id: str, payload: StaticPageUpdateSchema) -> StaticPage:
        existing = await self.get_static_page(page_id)
        await self._check_renamed_slug(STATIC_PAGES, existing.slug, payload.slug)
        merged = existing.model_copy(update={
            key: value
            for key, value in {
                "slug": payload.slug,
                "available_languages": payload.available_languages,
                "translations": payload.translations,
                "draft": payload.draft,
            }.items()
            if value is not None
        })
        validate_static_page(merged.slug, merged.available_languages, merged.translations)

        data = {
            "slug": merged.slug,
            "availableLanguages": merged.available_languages,
            "translations": {
                code: translation.model_dump(by_alias=True, exclude_none=True)
                for code, translation in merged.translations.items()
            },
            "draft": merged.draft,
            "updatedAt": utc_now(),
        }
        if existing.created_at is not None:
            data["createdAt"] = existing.created_at
        await self._write("update static page", self.store.set_document(STATIC_PAGES, page_id, data, merge=False))
        return merged

    async def delete_static_page(self, page_id: str) -> None:
        await self.get_static_page(page_id)
        await self._write("delete static page", self.store.delete_document(STATIC_PAGES, page_id))

    # ============================================
    # CATEGORY COPIES
    # ============================================

    async def list_category_documents(self) -> list[Category]:
        docs = await self._write("list categories", self.store.query_collection(CATEGORIES))
        return [firestore_category_to_model(data, doc_id) for doc_id, data in docs]

    async def save_category(self, category: Category) -> Category:
        """Upsert a Firestore copy; the slug must exist in the static tree"""
        known = self.taxonomy.category_by_slug(category.slug)
        if known is None:
            raise TranslationValidationError([f"slug: unknown category '{category.slug}'"])
        known_subs = {sub.slug for sub in known.subcategories}
        unknown = [sub.slug for sub in category.subcategories if sub.slug not in known_subs]
        if unknown:
            raise TranslationValidationError(
                [f"subcategories: unknown subcategory '{slug}'" for slug in unknown])

        await self._write(
            "save category",
            self.store.set_document(CATEGORIES, category.slug, category_model_to_firestore(category)),
        )
        return category

    async def seed_categories(self) -> list[Category]:
        """Mirror the static tree, with display names from the UI table"""
        seeded = []
        for category in self.taxonomy.all_categories():
            copy = Category(
                slug=category.slug,
                titles={code: self.taxonomy.category_name(category.slug, code) for code in SUPPORTED_LANGUAGES},
                subcategories=tuple(
                    sub.model_copy(update={
                        "titles": {
                            code: self.taxonomy.subcategory_name(sub.slug, code)
                            for code in SUPPORTED_LANGUAGES
                        }
                    })
                    for sub in category.subcategories
                ),
            )
            seeded.append(await self.save_category(copy))
        logger.info(f"Seeded {len(seeded)} categories")
        return seeded


content_admin_service = ContentAdminService()
