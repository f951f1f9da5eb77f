"""
Article model and Firestore conversion helpers
"""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from kalima.utils.timestamps import parse_timestamp


class ContentSection(BaseModel):
    """One titled block of article body text"""

    title: Optional[str] = None
    paragraph: str = ""
    references: list[str] = Field(default_factory=list)

    @field_validator("paragraph", mode="before")
    @classmethod
    def _paragraph_text(cls, value: Any):
        return value or ""

    @field_validator("references", mode="before")
    @classmethod
    def _references_list(cls, value: Any):
        return value or []


class ArticleTranslation(BaseModel):
    title: str = ""
    summary: str = ""
    category: Optional[str] = None
    subcategory: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    content: list[ContentSection] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "summary", mode="before")
    @classmethod
    def _text_fields(cls, value: Any):
        # The store is schema-less; null text reads as empty
        return value or ""

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords_list(cls, value: Any):
        return value or []

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_sections(cls, value: Any):
        # Older documents store the body as a list of plain paragraphs
        if value is None:
            return []
        if isinstance(value, str):
            return [{"paragraph": value}]
        sections = []
        for item in value:
            if isinstance(item, str):
                sections.append({"paragraph": item})
            elif isinstance(item, dict) and "paragraph" not in item and "text" in item:
                sections.append({**item, "paragraph": item.get("text") or ""})
            else:
                sections.append(item)
        return sections


class ContentEntity(BaseModel):
    """Fields shared by every translatable document (articles, static pages)"""

    id: str
    slug: str = ""
    available_languages: list[str] = Field(
        default_factory=list, alias="availableLanguages")
    draft: bool = False
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any):
        return parse_timestamp(value)

    @field_validator("available_languages", mode="before")
    @classmethod
    def _languages_list(cls, value: Any):
        return list(value or [])


class Article(ContentEntity):
    translations: Dict[str, ArticleTranslation] = Field(default_factory=dict)
    image_url: str = Field("", alias="imageUrl")
    # Legacy single-language documents carry the taxonomy at the top level
    category: Optional[str] = None
    subcategory: Optional[str] = None

    @field_validator("translations", mode="before")
    @classmethod
    def _translations_dict(cls, value: Any):
        return value or {}

    @field_validator("image_url", mode="before")
    @classmethod
    def _image_url(cls, value: Any):
        return value or ""


def firestore_article_to_model(doc: dict, doc_id: str) -> Article:
    return Article.model_validate({**doc, "id": doc_id})


def article_model_to_firestore(article: Article) -> dict:
    data = article.model_dump(by_alias=True, exclude_none=True)
    data.pop("id", None)
    return data
