from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from kalima.dependencies import get_current_user, get_optional_user
from kalima.exceptions import FetchFailureError, TranslationValidationError
from kalima.main import app
from kalima.models.user import UserProfile
from kalima.services.content_admin import ContentAdminService
from kalima.services.content_query import ContentQueryService
from kalima.services.favorites import ProfileService

client = TestClient(app)


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides = {}


def _sign_in(user: UserProfile):
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_optional_user] = lambda: user


@pytest.fixture
def articles_query():
    mock = AsyncMock(spec=ContentQueryService)
    with patch("kalima.api.routes.articles.content_query_service", mock):
        yield mock


def test_list_articles_in_request_language(articles_query, make_article):
    articles_query.query.return_value = [make_article("a1", languages=("en", "fr"))]

    response = client.get("/api/v1/articles/?lang=fr&category=culture")

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "ready"
    assert body["articles"][0]["language"] == "fr"
    article_filter = articles_query.query.await_args.args[0]
    assert (article_filter.category, article_filter.language, article_filter.draft) == ("culture", "fr", False)


def test_language_cookie_is_used_without_lang_param(articles_query):
    articles_query.query.return_value = []
    client.cookies.set("language", "de")
    try:
        response = client.get("/api/v1/articles/")
    finally:
        client.cookies.clear()

    assert response.json()["state"] == "empty"
    assert articles_query.query.await_args.args[0].language == "de"


def test_unsupported_lang_param(articles_query):
    response = client.get("/api/v1/articles/?lang=xx")

    assert response.status_code == 400


def test_missing_article_is_404(articles_query):
    articles_query.get_article_by_slug.return_value = None

    response = client.get("/api/v1/articles/nope")

    assert response.status_code == 404
    assert response.json()["kind"] == "article"


def test_store_failure_is_502(articles_query):
    articles_query.query.side_effect = FetchFailureError("list articles", RuntimeError("down"))

    response = client.get("/api/v1/articles/")

    assert response.status_code == 502


def test_categories_tree():
    response = client.get("/api/v1/categories/?lang=es")

    assert response.status_code == 200
    slugs = [c["slug"] for c in response.json()]
    assert slugs == ["language-learning", "culture", "science", "stories", "tips-lifestyle"]


def test_unknown_category_is_404():
    response = client.get("/api/v1/categories/astrology")

    assert response.status_code == 404
    assert response.json()["backLink"] == "/categories"


def test_favorites_require_authentication():
    response = client.get("/api/v1/favorites/")

    assert response.status_code in (401, 403)


def test_toggle_favorite(reader, make_article):
    _sign_in(reader)
    query = AsyncMock(spec=ContentQueryService)
    query.get_article_by_slug.return_value = make_article("a1")
    profiles = AsyncMock(spec=ProfileService)
    profiles.toggle_favorite.return_value = True

    with patch("kalima.api.routes.favorites.content_query_service", query), \
            patch("kalima.api.routes.favorites.profile_service", profiles):
        response = client.post("/api/v1/favorites/a1")

    assert response.status_code == 200
    assert response.json() == {"articleId": "a1", "favorite": True}
    profiles.toggle_favorite.assert_awaited_once_with(reader, "a1")


def test_set_language_preference_sets_cookie_and_profile(reader):
    _sign_in(reader)
    profiles = AsyncMock(spec=ProfileService)

    with patch("kalima.api.routes.preferences.profile_service", profiles):
        response = client.put("/api/v1/preferences/language", json={"language": "ar"})

    client.cookies.clear()
    assert response.status_code == 200
    assert response.json() == {"language": "ar", "direction": "rtl"}
    assert "language=ar" in response.headers["set-cookie"]
    profiles.set_preferred_language.assert_awaited_once_with("u1", "ar")


def test_admin_endpoints_reject_readers(reader):
    _sign_in(reader)

    response = client.get("/api/v1/admin/articles")

    assert response.status_code == 403


def test_admin_validation_failure_is_422(admin_user):
    _sign_in(admin_user)
    admin = AsyncMock(spec=ContentAdminService)
    admin.create_article.side_effect = TranslationValidationError(["translations.fr: missing translation"])

    with patch("kalima.api.routes.admin.content_admin_service", admin):
        response = client.post("/api/v1/admin/articles", json={"availableLanguages": ["fr"], "translations": {}})

    assert response.status_code == 422
    assert response.json()["problems"] == ["translations.fr: missing translation"]


def test_view_endpoint():
    response = client.get("/api/v1/view", params={"path": "/favorites"})

    body = response.json()
    assert body["state"] == "redirect"
    assert body["redirectTo"] == "/login"
    assert body["canonicalPath"] == "/en/favorites"
    assert body["rewritten"] is True


def test_sitemap_survives_store_failure():
    query = AsyncMock(spec=ContentQueryService)
    query.list_static_pages.side_effect = FetchFailureError("list static pages")

    with patch("kalima.api.routes.views.content_query_service", query):
        response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<loc>https://kalima.online/categories</loc>" in response.text


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
