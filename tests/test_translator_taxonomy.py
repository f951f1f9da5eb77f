import logging

from kalima.data.translations import TRANSLATIONS
from kalima.models.language import SUPPORTED_LANGUAGES
from kalima.services.taxonomy import taxonomy
from kalima.services.translator import Translator, translator

# Keys looked up by name outside the taxonomy
UI_KEYS = [
    "article.notFound",
    "article.noArticles",
    "page.notFound",
    "search.noResults",
    "search.enterSearchTerm",
    "favorites.empty",
    "suggestions.empty",
    "error.generic",
    "error.notFound",
    "error.categoryNotFound",
    "error.subcategoryNotFound",
    "error.unauthorized",
]


def test_english_table_covers_every_required_key():
    required = taxonomy.label_keys() + UI_KEYS

    assert translator.check_completeness(required) == []


def test_every_supported_language_has_a_table():
    assert set(SUPPORTED_LANGUAGES) <= set(TRANSLATIONS)


def test_translate_requested_language():
    assert translator.translate("categories.culture", "de") == "Kultur"


def test_translate_falls_back_to_english():
    table = Translator({"en": {"nav.home": "Home"}, "fr": {}})

    assert table.translate("nav.home", "fr") == "Home"


def test_missing_key_returns_key_and_warns(caplog):
    table = Translator({"en": {}})

    with caplog.at_level(logging.WARNING, logger="kalima.services.translator"):
        assert table.translate("nav.nowhere", "en") == "nav.nowhere"

    assert "nav.nowhere" in caplog.text


def test_missing_keys_reports_gaps():
    table = Translator({"en": {"a": "A", "b": "B"}, "fr": {"a": "A"}})

    assert table.missing_keys("fr") == ["b"]


def test_category_lookup():
    assert taxonomy.category_by_slug("science").slug == "science"
    assert taxonomy.category_by_slug("astrology") is None


def test_subcategories_of():
    assert [s.slug for s in taxonomy.subcategories_of("stories")] == ["short-stories", "fairy-tales"]
    assert taxonomy.subcategories_of("astrology") == []


def test_subcategory_by_slug_belongs_to_its_category():
    assert taxonomy.subcategory_by_slug("culture", "food").slug == "food"
    assert taxonomy.subcategory_by_slug("science", "food") is None


def test_localized_tree_uses_display_names():
    tree = taxonomy.localized_tree("fr")
    culture = next(c for c in tree if c.slug == "culture")

    assert culture.name == "Culture"
    assert [s.name for s in culture.subcategories] == ["Histoire", "Cuisine", "Voyage"]
