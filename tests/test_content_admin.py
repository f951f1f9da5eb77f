from datetime import datetime, timezone

import pytest

from kalima.exceptions import ContentNotFoundError, TranslationValidationError
from kalima.models.article import ArticleTranslation
from kalima.models.category import Category, Subcategory
from kalima.schemas.article import ArticleCreateSchema, ArticleUpdateSchema
from kalima.schemas.static_page import StaticPageCreateSchema, StaticPageUpdateSchema
from kalima.services.content_admin import ContentAdminService, validate_article
from kalima.services.firebase_service import ARTICLES, CATEGORIES, STATIC_PAGES


def _translation(**overrides):
    data = {
        "title": "Ten German idioms",
        "summary": "Sayings you will hear every day",
        "category": "language-learning",
        "subcategory": "phrases",
        "content": [{"paragraph": "Tomaten auf den Augen haben"}],
    }
    data.update(overrides)
    return data


@pytest.fixture
def service(mock_store):
    mock_store.query_collection.return_value = []
    mock_store.add_document.return_value = "new-id"
    return ContentAdminService(mock_store)


def test_valid_article_passes():
    validate_article("ten-german-idioms", ["en"], {"en": ArticleTranslation(**_translation())})


def test_every_problem_is_reported():
    translations = {"en": ArticleTranslation(**_translation(title="", content=[]))}

    with pytest.raises(TranslationValidationError) as exc_info:
        validate_article("Bad Slug", ["en", "fr", "it"], translations)

    problems = exc_info.value.problems
    assert "slug: 'Bad Slug' is not a valid slug" in problems
    assert "translations.fr: missing translation" in problems
    assert "availableLanguages: unsupported language 'it'" in problems
    assert "translations.en.title: required" in problems
    assert "translations.en.content: at least one paragraph is required" in problems


def test_unknown_category_is_rejected():
    translations = {"en": ArticleTranslation(**_translation(category="culture", subcategory="grammar"))}

    with pytest.raises(TranslationValidationError) as exc_info:
        validate_article("x", ["en"], translations)

    assert exc_info.value.problems == ["translations.en: unknown category 'culture/grammar'"]


def test_no_languages_is_rejected():
    with pytest.raises(TranslationValidationError):
        validate_article("x", [], {})


@pytest.mark.asyncio
async def test_create_article_generates_slug_from_english_title(service, mock_store):
    payload = ArticleCreateSchema(available_languages=["en"], translations={"en": _translation()})
    mock_store.query_collection.return_value = [("old", {"slug": "ten-german-idioms"})]

    article = await service.create_article(payload)

    assert article.id == "new-id"
    assert article.slug == "ten-german-idioms-2"
    collection, data = mock_store.add_document.await_args.args
    assert collection == ARTICLES
    assert data["draft"] is True
    assert data["createdAt"] is not None


@pytest.mark.asyncio
async def test_invalid_article_is_never_written(service, mock_store):
    payload = ArticleCreateSchema(
        slug="idioms",
        available_languages=["en", "de"],
        translations={"en": _translation()},
    )

    with pytest.raises(TranslationValidationError):
        await service.create_article(payload)

    mock_store.add_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_duplicate_slug_is_rejected(service, mock_store):
    mock_store.query_collection.return_value = [("old", {"slug": "idioms"})]
    payload = ArticleCreateSchema(slug="idioms", available_languages=["en"], translations={"en": _translation()})

    with pytest.raises(TranslationValidationError):
        await service.create_article(payload)


@pytest.mark.asyncio
async def test_update_writes_the_whole_document(service, mock_store):
    mock_store.get_document.return_value = {
        "slug": "idioms",
        "availableLanguages": ["en"],
        "translations": {"en": _translation()},
        "draft": True,
        "createdAt": datetime(2024, 1, 5, tzinfo=timezone.utc),
    }

    article = await service.update_article("a1", ArticleUpdateSchema(draft=False))

    assert article.draft is False
    assert article.slug == "idioms"
    collection, doc_id, data = mock_store.set_document.await_args.args
    assert (collection, doc_id) == (ARTICLES, "a1")
    assert data["draft"] is False
    assert data["createdAt"] == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert mock_store.set_document.await_args.kwargs == {"merge": False}


@pytest.mark.asyncio
async def test_update_missing_article(service, mock_store):
    mock_store.get_document.return_value = None

    with pytest.raises(ContentNotFoundError):
        await service.update_article("nope", ArticleUpdateSchema(draft=False))


@pytest.mark.asyncio
async def test_create_static_page(service, mock_store):
    payload = StaticPageCreateSchema(
        slug="about",
        available_languages=["en"],
        translations={"en": {"title": "About", "content": "Who we are", "metaDescription": "About us"}},
    )

    page = await service.create_static_page(payload)

    assert page.slug == "about"
    collection, data = mock_store.add_document.await_args.args
    assert collection == STATIC_PAGES
    assert data["translations"]["en"]["metaDescription"] == "About us"


@pytest.mark.asyncio
async def test_seed_categories_mirrors_static_tree(service, mock_store):
    seeded = await service.seed_categories()

    assert [c.slug for c in seeded] == ["language-learning", "culture", "science", "stories", "tips-lifestyle"]
    assert mock_store.set_document.await_count == 5
    culture = next(c for c in seeded if c.slug == "culture")
    assert culture.titles["de"] == "Kultur"
    assert culture.subcategory("food").titles["fr"] == "Cuisine"
    collection, doc_id, _ = mock_store.set_document.await_args_list[1].args
    assert (collection, doc_id) == (CATEGORIES, "culture")


@pytest.mark.asyncio
async def test_save_category_rejects_unknown_subcategory(service):
    category = Category(slug="culture", subcategories=(Subcategory(slug="opera"),))

    with pytest.raises(TranslationValidationError):
        await service.save_category(category)


@pytest.mark.asyncio
async def test_dropped_translation_is_removed_from_the_stored_document(service, mock_store):
    mock_store.get_document.return_value = {
        "slug": "idioms",
        "availableLanguages": ["en", "fr"],
        "translations": {
            "en": _translation(),
            "fr": _translation(title="Dix expressions", category="culture", subcategory="food"),
        },
    }

    await service.update_article("a1", ArticleUpdateSchema(
        available_languages=["en"], translations={"en": _translation()}))

    _, _, data = mock_store.set_document.await_args.args
    assert list(data["translations"]) == ["en"]
    assert mock_store.set_document.await_args.kwargs == {"merge": False}


@pytest.mark.asyncio
async def test_rename_to_taken_slug_is_rejected(service, mock_store):
    mock_store.get_document.return_value = {
        "slug": "idioms",
        "availableLanguages": ["en"],
        "translations": {"en": _translation()},
    }
    mock_store.query_collection.return_value = [("a1", {"slug": "idioms"}), ("a2", {"slug": "taken"})]

    with pytest.raises(TranslationValidationError) as exc_info:
        await service.update_article("a1", ArticleUpdateSchema(slug="taken"))

    assert exc_info.value.problems == ["slug: 'taken' is already in use"]
    mock_store.set_document.assert_not_awaited()


@pytest.mark.asyncio
async def test_keeping_own_slug_is_allowed(service, mock_store):
    mock_store.get_document.return_value = {
        "slug": "idioms",
        "availableLanguages": ["en"],
        "translations": {"en": _translation()},
    }
    mock_store.query_collection.return_value = [("a1", {"slug": "idioms"})]

    article = await service.update_article("a1", ArticleUpdateSchema(slug="idioms", draft=False))

    assert article.slug == "idioms"
    mock_store.set_document.assert_awaited_once()


@pytest.mark.asyncio
async def test_static_page_rename_to_taken_slug_is_rejected(service, mock_store):
    mock_store.get_document.return_value = {
        "slug": "about",
        "availableLanguages": ["en"],
        "translations": {"en": {"title": "About", "content": "Who we are"}},
    }
    mock_store.query_collection.return_value = [("p2", {"slug": "privacy"})]

    with pytest.raises(TranslationValidationError):
        await service.update_static_page("p1", StaticPageUpdateSchema(slug="privacy"))

    mock_store.set_document.assert_not_awaited()
