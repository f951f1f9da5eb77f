"""
Static page model (about, privacy, terms...)
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from kalima.models.article import ContentEntity


class PageTranslation(BaseModel):
    title: str = ""
    content: str = ""
    keywords: list[str] = Field(default_factory=list)
    meta_description: Optional[str] = Field(None, alias="metaDescription")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _text_fields(cls, value: Any):
        return value or ""

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords_list(cls, value: Any):
        return value or []


class StaticPage(ContentEntity):
    translations: Dict[str, PageTranslation] = Field(default_factory=dict)

    @field_validator("translations", mode="before")
    @classmethod
    def _translations_dict(cls, value: Any):
        return value or {}


def firestore_page_to_model(doc: dict, doc_id: str) -> StaticPage:
    return StaticPage.model_validate({**doc, "id": doc_id})


def page_model_to_firestore(page: StaticPage) -> dict:
    data = page.model_dump(by_alias=True, exclude_none=True)
    data.pop("id", None)
    return data
