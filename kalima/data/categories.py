"""
Canonical category tree used for routing and navigation.

Keyed by slug; display names come from the UI translation table
(categories.<slug> / subcategories.<slug>), not from here.
"""

from kalima.models.category import Category, Subcategory


def _category(slug: str, *sub_slugs: str) -> Category:
    return Category(
        slug=slug,
        subcategories=tuple(Subcategory(slug=s) for s in sub_slugs),
    )


CATEGORIES: tuple[Category, ...] = (
    _category("language-learning", "vocabulary", "grammar", "phrases"),
    _category("culture", "history", "food", "travel"),
    _category("science", "nature", "technology", "health"),
    _category("stories", "short-stories", "fairy-tales"),
    _category("tips-lifestyle", "productivity", "study-tips", "motivation"),
)
