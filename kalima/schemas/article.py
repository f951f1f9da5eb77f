"""
Article request/response schemas
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime

from kalima.models.article import ArticleTranslation


class ArticleCreateSchema(BaseModel):
    slug: Optional[str] = Field(None, max_length=200)
    available_languages: list[str] = Field(default_factory=list, alias="availableLanguages")
    translations: Dict[str, ArticleTranslation] = Field(default_factory=dict)
    draft: bool = Field(default=True)
    image_url: str = Field("", alias="imageUrl")
    category: Optional[str] = None
    subcategory: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "slug": "ten-german-idioms",
                "availableLanguages": ["en", "de"],
                "translations": {
                    "en": {
                        "title": "Ten German idioms",
                        "summary": "Sayings you will hear every day",
                        "category": "language-learning",
                        "subcategory": "phrases",
                        "content": [{"title": "Tomaten auf den Augen", "paragraph": "..."}],
                    }
                },
                "draft": True,
            }
        }
    )


class ArticleUpdateSchema(BaseModel):
    slug: Optional[str] = Field(None, max_length=200)
    available_languages: Optional[list[str]] = Field(None, alias="availableLanguages")
    translations: Optional[Dict[str, ArticleTranslation]] = None
    draft: Optional[bool] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    category: Optional[str] = None
    subcategory: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ArticleResponse(BaseModel):
    id: str
    slug: str
    available_languages: list[str] = Field(..., alias="availableLanguages")
    translations: Dict[str, ArticleTranslation]
    draft: bool
    image_url: str = Field("", alias="imageUrl")
    category: Optional[str] = None
    subcategory: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
    )


class LocalizedArticleResponse(BaseModel):
    """An article projected into one language"""

    id: str
    slug: str
    language: str
    requested_language: str = Field(..., alias="requestedLanguage")
    is_fallback: bool = Field(False, alias="isFallback")
    available_languages: list[str] = Field(..., alias="availableLanguages")
    title: str
    summary: str = ""
    category: Optional[str] = None
    subcategory: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    content: list[Any] = Field(default_factory=list)
    image_url: str = Field("", alias="imageUrl")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class ArticleListResponse(BaseModel):
    articles: list[LocalizedArticleResponse]
    total: int
    state: str

    model_config = ConfigDict(populate_by_name=True)


class FavoriteToggleResponse(BaseModel):
    article_id: str = Field(..., alias="articleId")
    favorite: bool

    model_config = ConfigDict(populate_by_name=True)
