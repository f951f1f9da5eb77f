import pytest

from kalima.api.route_table import Capability, build_route_table

table = build_route_table()


@pytest.mark.parametrize(
    "path, name, params",
    [
        ("/", "home", {}),
        ("/categories", "categories", {}),
        ("/categories/culture", "category", {"cat": "culture"}),
        ("/categories/culture/food", "subcategory", {"cat": "culture", "sub": "food"}),
        (
            "/categories/culture/food/couscous",
            "category_article",
            {"cat": "culture", "sub": "food", "slug": "couscous"},
        ),
        ("/article/couscous", "article", {"slug": "couscous"}),
        ("/page/about", "page", {"slug": "about"}),
        ("/search", "search", {}),
        ("/favorites", "favorites", {}),
        ("/suggestions", "suggestions", {}),
    ],
)
def test_localized_routes_match_with_and_without_prefix(path, name, params):
    for language_in_path in (False, True):
        match = table.match(path, language_in_path)
        assert match.route.name == name
        assert match.params == params


def test_admin_wildcard_captures_rest():
    match = table.match("/admin/articles/edit/x")

    assert match.route.name == "admin"
    assert match.params["rest"] == "/articles/edit/x"


@pytest.mark.parametrize("path", ["/login", "/register"])
def test_unlocalized_routes_reject_language_prefix(path):
    assert table.match(path, language_in_path=False) is not None
    assert table.match(path, language_in_path=True) is None


def test_prefixed_admin_path_still_matches_admin():
    match = table.match("/admin/articles", language_in_path=True)

    assert match.route.name == "admin"
    assert match.route.capability == Capability.AUTHENTICATED
    assert match.params["rest"] == "/articles"


@pytest.mark.parametrize("name", ["favorites", "profile", "suggestions", "admin"])
def test_gated_routes(name):
    assert table.by_name(name).capability == Capability.AUTHENTICATED


@pytest.mark.parametrize("name", ["home", "article", "search", "login"])
def test_public_routes(name):
    assert table.by_name(name).capability is None


def test_unknown_path_has_no_match():
    assert table.match("/nowhere/at/all") is None
    assert table.by_name("nowhere") is None
