"""
Category / subcategory models

The navigational tree is static (see kalima.data.categories); admins manage
Firestore copies of it in the "categories" collection, document id = slug.
"""

from typing import Dict
from pydantic import BaseModel, Field, ConfigDict


class Subcategory(BaseModel):
    slug: str
    titles: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Category(BaseModel):
    slug: str
    titles: Dict[str, str] = Field(default_factory=dict)
    subcategories: tuple[Subcategory, ...] = ()

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def subcategory(self, slug: str):
        for sub in self.subcategories:
            if sub.slug == slug:
                return sub
        return None


def firestore_category_to_model(doc: dict, doc_id: str) -> Category:
    data = {**doc}
    data.setdefault("slug", doc_id)
    data["subcategories"] = tuple(data.get("subcategories") or ())
    return Category.model_validate(data)


def category_model_to_firestore(category: Category) -> dict:
    data = category.model_dump()
    data["subcategories"] = list(data["subcategories"])
    return data
