"""
User Models for Kalima Backend

This module defines the UserProfile stored in Firebase Firestore and the
suggestions readers submit from it.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from kalima.utils.timestamps import parse_timestamp, utc_now


class SuggestedArticle(BaseModel):
    """A reader-submitted article idea awaiting review"""

    title: str = Field(..., min_length=1, max_length=300)
    language: str
    content: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class UserProfile(BaseModel):
    """
    Reader profile

    Collection: users/
    Document ID: uid (Firebase Auth UID)
    """

    uid: str = Field(..., description="Firebase Authentication UID")
    email: str = ""
    display_name: str = Field("", alias="displayName")
    favorites: list[str] = Field(default_factory=list)
    suggested_articles: list[SuggestedArticle] = Field(
        default_factory=list, alias="suggestedArticles")
    preferred_language: Optional[str] = Field(None, alias="preferredLanguage")
    is_admin: bool = Field(False, alias="isAdmin")
    created_at: Optional[datetime] = Field(
        default_factory=utc_now, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("favorites", "suggested_articles", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        return parse_timestamp(value)


def firestore_user_to_model(doc: dict, uid: str) -> UserProfile:
    return UserProfile.model_validate({**doc, "uid": uid})


def user_model_to_firestore(user: UserProfile) -> dict:
    return user.model_dump(by_alias=True, exclude_none=True)
