"""
Static page request/response schemas
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Optional

from kalima.models.static_page import PageTranslation


class StaticPageCreateSchema(BaseModel):
    slug: str = Field(..., min_length=1, max_length=200)
    available_languages: list[str] = Field(default_factory=list, alias="availableLanguages")
    translations: Dict[str, PageTranslation] = Field(default_factory=dict)
    draft: bool = False

    model_config = ConfigDict(populate_by_name=True)


class StaticPageUpdateSchema(BaseModel):
    slug: Optional[str] = Field(None, min_length=1, max_length=200)
    available_languages: Optional[list[str]] = Field(None, alias="availableLanguages")
    translations: Optional[Dict[str, PageTranslation]] = None
    draft: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True)


class LocalizedPageResponse(BaseModel):
    id: str
    slug: str
    language: str
    requested_language: str = Field(..., alias="requestedLanguage")
    is_fallback: bool = Field(False, alias="isFallback")
    available_languages: list[str] = Field(..., alias="availableLanguages")
    title: str
    content: str = ""
    keywords: list[str] = Field(default_factory=list)
    meta_description: Optional[str] = Field(None, alias="metaDescription")

    model_config = ConfigDict(populate_by_name=True)
