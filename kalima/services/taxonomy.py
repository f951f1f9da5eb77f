"""
Taxonomy lookups over the static category tree
"""

from typing import Optional, Sequence, Union
from pydantic import BaseModel

from kalima.data.categories import CATEGORIES
from kalima.models.category import Category, Subcategory
from kalima.models.language import Language
from kalima.services.translator import Translator, translator as default_translator


class LocalizedSubcategory(BaseModel):
    slug: str
    name: str


class LocalizedCategory(BaseModel):
    slug: str
    name: str
    subcategories: list[LocalizedSubcategory]


class Taxonomy:
    """Two-level category tree keyed by slug, built once"""

    def __init__(self, categories: Sequence[Category] = CATEGORIES, translator: Optional[Translator] = None):
        self._categories = tuple(categories)
        self._by_slug = {category.slug: category for category in self._categories}
        self.translator = translator or default_translator

    def all_categories(self) -> tuple[Category, ...]:
        return self._categories

    def category_by_slug(self, slug: str) -> Optional[Category]:
        return self._by_slug.get(slug)

    def subcategories_of(self, category_slug: str) -> list[Subcategory]:
        category = self._by_slug.get(category_slug)
        if category is None:
            return []
        return list(category.subcategories)

    def subcategory_by_slug(self, category_slug: str, subcategory_slug: str) -> Optional[Subcategory]:
        category = self._by_slug.get(category_slug)
        if category is None:
            return None
        return category.subcategory(subcategory_slug)

    def category_name(self, slug: str, language: Union[Language, str]) -> str:
        return self.translator.translate(f"categories.{slug}", language)

    def subcategory_name(self, slug: str, language: Union[Language, str]) -> str:
        return self.translator.translate(f"subcategories.{slug}", language)

    def localize(self, category: Category, language: Union[Language, str]) -> LocalizedCategory:
        return LocalizedCategory(
            slug=category.slug,
            name=self.category_name(category.slug, language),
            subcategories=[
                LocalizedSubcategory(slug=sub.slug, name=self.subcategory_name(sub.slug, language))
                for sub in category.subcategories
            ],
        )

    def localized_tree(self, language: Union[Language, str]) -> list[LocalizedCategory]:
        return [self.localize(category, language) for category in self._categories]

    def label_keys(self) -> list[str]:
        """Every UI key the tree needs for display"""
        keys = []
        for category in self._categories:
            keys.append(f"categories.{category.slug}")
            keys.extend(f"subcategories.{sub.slug}" for sub in category.subcategories)
        return keys


taxonomy = Taxonomy()
