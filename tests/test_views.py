from unittest.mock import AsyncMock

import pytest

from kalima.exceptions import FetchFailureError
from kalima.models.article import Article
from kalima.models.static_page import StaticPage
from kalima.schemas.view import ViewState
from kalima.services.content_query import ArticleFilter, ContentQueryService
from kalima.services.views import ViewService


@pytest.fixture
def query_service():
    service = AsyncMock(spec=ContentQueryService)
    service.query.return_value = []
    service.get_articles_by_ids.return_value = []
    return service


@pytest.fixture
def views(query_service):
    return ViewService(query_service=query_service)


@pytest.mark.asyncio
async def test_unprefixed_path_reports_canonical_rewrite(views):
    view = await views.render("/categories", preferred_language="fr")

    assert view.route == "categories"
    assert view.language == "fr"
    assert view.canonical_path == "/fr/categories"
    assert view.rewritten is True
    assert view.state == ViewState.READY


@pytest.mark.asyncio
async def test_root_is_not_rewritten(views):
    view = await views.render("/", preferred_language="de")

    assert view.route == "home"
    assert view.canonical_path == "/"
    assert view.rewritten is False


@pytest.mark.asyncio
async def test_arabic_is_right_to_left(views):
    view = await views.render("/ar/categories")

    assert view.direction == "rtl"
    assert view.is_language_in_path is True
    assert view.rewritten is False


@pytest.mark.asyncio
async def test_gated_route_redirects_to_login(views):
    for path in ("/favorites", "/fr/favorites", "/admin/articles", "/fr/admin", "/profile"):
        view = await views.render(path)
        assert view.state == ViewState.REDIRECT
        assert view.redirect_to == "/login"


@pytest.mark.asyncio
async def test_unknown_category_is_not_found_with_back_link(views):
    view = await views.render("/fr/categories/astrology")

    assert view.state == ViewState.NOT_FOUND
    assert view.back_link == "/fr/categories"


@pytest.mark.asyncio
async def test_unknown_subcategory_links_to_category(views):
    view = await views.render("/categories/culture/opera")

    assert view.state == ViewState.NOT_FOUND
    assert view.back_link == "/categories/culture"


@pytest.mark.asyncio
async def test_unmatched_path_is_not_found(views):
    view = await views.render("/de/nowhere")

    assert view.route is None
    assert view.state == ViewState.NOT_FOUND
    assert view.back_link == "/de"


@pytest.mark.asyncio
async def test_subcategory_lists_articles(views, query_service, make_article):
    query_service.query.return_value = [make_article("a1", languages=("en", "fr"))]

    view = await views.render("/fr/categories/culture/food")

    assert view.state == ViewState.READY
    assert [a["slug"] for a in view.data["articles"]] == ["a1"]
    assert view.data["subcategory"]["name"] == "Cuisine"
    query_service.query.assert_awaited_once_with(
        ArticleFilter(category="culture", subcategory="food", language="fr", draft=False))


@pytest.mark.asyncio
async def test_subcategory_without_articles_is_empty(views):
    view = await views.render("/en/categories/culture/food")

    assert view.state == ViewState.EMPTY
    assert view.message == "No articles found"


@pytest.mark.asyncio
async def test_article_falls_back_to_english(views, query_service, make_article):
    query_service.get_article_by_slug.return_value = make_article("a1", languages=("en",))

    view = await views.render("/de/article/a1")

    assert view.state == ViewState.READY
    assert view.data["article"]["language"] == "en"
    assert view.data["article"]["isFallback"] is True


@pytest.mark.asyncio
async def test_draft_article_is_not_found(views, query_service, make_article):
    query_service.get_article_by_slug.return_value = make_article("a1", draft=True)

    view = await views.render("/en/article/a1")

    assert view.state == ViewState.NOT_FOUND
    assert view.message == "Article not found"


@pytest.mark.asyncio
async def test_category_article_must_match_path(views, query_service, make_article):
    query_service.get_article_by_slug.return_value = make_article("a1", category="science", subcategory="health")

    view = await views.render("/en/categories/culture/food/a1")

    assert view.state == ViewState.NOT_FOUND
    assert view.back_link == "/en/categories/culture/food"


@pytest.mark.asyncio
async def test_store_failure_is_an_error_state(views, query_service):
    query_service.get_static_page_by_slug.side_effect = FetchFailureError("get static page")

    view = await views.render("/fr/page/about")

    assert view.state == ViewState.ERROR
    assert view.message == "Quelque chose s'est mal passé"


@pytest.mark.asyncio
async def test_static_page(views, query_service):
    query_service.get_static_page_by_slug.return_value = StaticPage.model_validate({
        "id": "p1",
        "slug": "about",
        "availableLanguages": ["en"],
        "translations": {"en": {"title": "About", "content": "Who we are"}},
    })

    view = await views.render("/en/page/about")

    assert view.data["page"]["title"] == "About"


@pytest.mark.asyncio
async def test_search_needs_two_characters(views, query_service):
    view = await views.render("/en/search?q=a")

    assert view.state == ViewState.EMPTY
    assert view.message == "Enter at least 2 characters to search"
    query_service.search.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_results(views, query_service, make_article):
    query_service.search.return_value = [make_article("a1")]

    view = await views.render("/en/search?q=a1")

    assert view.state == ViewState.READY
    assert view.data["query"] == "a1"


@pytest.mark.asyncio
async def test_favorites_in_store_order(views, query_service, make_article, reader):
    reader.favorites = ["D", "B"]
    query_service.get_articles_by_ids.return_value = [make_article(x) for x in ("B", "D")]

    view = await views.render("/en/favorites", user=reader)

    assert view.state == ViewState.READY
    assert [a["id"] for a in view.data["articles"]] == ["B", "D"]


@pytest.mark.asyncio
async def test_no_favorites_is_empty(views, reader):
    view = await views.render("/en/favorites", user=reader)

    assert view.state == ViewState.EMPTY
    assert view.message == "You have no favorite articles yet"


@pytest.mark.asyncio
async def test_admin_requires_admin_profile(views, reader, admin_user):
    denied = await views.render("/admin/articles", user=reader)
    allowed = await views.render("/admin/articles", user=admin_user)

    assert denied.state == ViewState.ERROR
    assert allowed.state == ViewState.READY
    assert allowed.data == {"section": "articles"}


@pytest.mark.asyncio
async def test_article_with_null_fields_renders(views, query_service, article_doc):
    doc = article_doc("nulls")
    doc["translations"]["en"].update({"summary": None, "keywords": None, "title": "Nulls"})
    query_service.get_article_by_slug.return_value = Article.model_validate({**doc, "id": "nulls"})

    view = await views.render("/en/article/nulls")

    assert view.state == ViewState.READY
    assert view.data["article"]["keywords"] == []
    assert view.data["article"]["summary"] == ""
