"""
Favorites and reader suggestions.

Favorites are stored as a list of article ids on the user document;
suggestions as a list of SuggestedArticle maps. Both are updated with
array union/remove, no read-modify-write except for deleting a suggestion
by position.
"""

import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from kalima.exceptions import ContentNotFoundError, FetchFailureError
from kalima.models.user import SuggestedArticle, UserProfile, firestore_user_to_model
from kalima.schemas.view import ViewState
from kalima.services.firebase_service import USERS, FirebaseService, firebase_service

logger = logging.getLogger(__name__)


class FavoritesView(BaseModel):
    state: ViewState
    articles: list[Any] = []


class PendingSuggestion(BaseModel):
    uid: str
    display_name: str
    email: str
    index: int
    suggestion: SuggestedArticle


def favorites_of(profile: Optional[UserProfile], all_entities: Iterable[Any]) -> FavoritesView:
    """
    Entities whose id is in the profile's favorites, in store order.

    A missing profile means it has not been resolved yet (loading); a
    profile without favorites, or whose favorites match nothing, is empty.
    """
    if profile is None:
        return FavoritesView(state=ViewState.LOADING)
    wanted = set(profile.favorites or ())
    if not wanted:
        return FavoritesView(state=ViewState.EMPTY)
    articles = [entity for entity in all_entities if getattr(entity, "id", None) in wanted]
    if not articles:
        return FavoritesView(state=ViewState.EMPTY)
    return FavoritesView(state=ViewState.READY, articles=articles)


def suggestions_of(profile: Optional[UserProfile]) -> list[SuggestedArticle]:
    if profile is None:
        return []
    return list(profile.suggested_articles)


def pending_suggestions(profiles: Iterable[UserProfile]) -> list[PendingSuggestion]:
    """Every suggestion across users, keeping its position for deletion"""
    pending = []
    for profile in profiles:
        for index, suggestion in enumerate(profile.suggested_articles):
            pending.append(PendingSuggestion(
                uid=profile.uid,
                display_name=profile.display_name,
                email=profile.email,
                index=index,
                suggestion=suggestion,
            ))
    return pending


class ProfileService:
    """User profile reads and writes"""

    def __init__(self, store: Optional[FirebaseService] = None):
        self.store = store or firebase_service

    async def get_profile(self, uid: str) -> Optional[UserProfile]:
        try:
            data = await self.store.get_document(USERS, uid)
        except Exception as e:
            logger.error(f"Error getting user data for {uid}: {e}")
            raise FetchFailureError("get user", e) from e
        if data is None:
            return None
        return firestore_user_to_model(data, uid)

    async def ensure_profile(self, uid: str, email: str = "", display_name: str = "") -> UserProfile:
        """Create the profile on first authentication"""
        profile = await self.get_profile(uid)
        if profile is not None:
            return profile
        profile = UserProfile(uid=uid, email=email or "", display_name=display_name or "")
        try:
            await self.store.set_document(USERS, uid, profile.model_dump(by_alias=True, exclude_none=True))
        except Exception as e:
            logger.error(f"Error creating user profile for {uid}: {e}")
            raise FetchFailureError("create user", e) from e
        logger.info(f"Created profile for user {uid}")
        return profile

    async def list_profiles(self) -> list[UserProfile]:
        try:
            docs = await self.store.query_collection(USERS)
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            raise FetchFailureError("list users", e) from e
        return [firestore_user_to_model(data, uid) for uid, data in docs]

    async def toggle_favorite(self, profile: UserProfile, article_id: str) -> bool:
        """Add or remove an article id; returns whether it is now a favorite"""
        now_favorite = article_id not in profile.favorites
        try:
            if now_favorite:
                await self.store.array_union(USERS, profile.uid, "favorites", article_id)
            else:
                await self.store.array_remove(USERS, profile.uid, "favorites", article_id)
        except Exception as e:
            logger.error(f"Error updating favorites for {profile.uid}: {e}")
            raise FetchFailureError("update favorites", e) from e
        return now_favorite

    async def add_suggestion(self, uid: str, suggestion: SuggestedArticle) -> None:
        try:
            await self.store.array_union(USERS, uid, "suggestedArticles", suggestion.model_dump())
        except Exception as e:
            logger.error(f"Error adding suggestion for {uid}: {e}")
            raise FetchFailureError("add suggestion", e) from e

    async def delete_suggestion(self, uid: str, index: int) -> None:
        profile = await self.get_profile(uid)
        if profile is None or not 0 <= index < len(profile.suggested_articles):
            raise ContentNotFoundError("suggestion", f"{uid}/{index}", parent_path="/admin/suggestions")
        remaining = [s.model_dump() for i, s in enumerate(profile.suggested_articles) if i != index]
        try:
            await self.store.update_document(USERS, uid, {"suggestedArticles": remaining})
        except Exception as e:
            logger.error(f"Error deleting suggestion for {uid}: {e}")
            raise FetchFailureError("delete suggestion", e) from e

    async def set_preferred_language(self, uid: str, language: str) -> None:
        try:
            await self.store.set_document(USERS, uid, {"preferredLanguage": language}, merge=True)
        except Exception as e:
            logger.error(f"Error saving language preference for {uid}: {e}")
            raise FetchFailureError("save preference", e) from e


profile_service = ProfileService()
