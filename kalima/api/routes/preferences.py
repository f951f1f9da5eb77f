"""Language preference API routes"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel
from typing import Optional

from kalima.config import settings
from kalima.dependencies import get_language_preference, get_optional_user
from kalima.models.language import Language, parse_language
from kalima.models.user import UserProfile
from kalima.services.favorites import profile_service

router = APIRouter(prefix="/api/v1/preferences", tags=["Preferences"])

# One year, like the browser-side stored choice
LANGUAGE_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


class LanguagePreference(BaseModel):
    language: str
    direction: Optional[str] = None


@router.get("/language", response_model=LanguagePreference)
async def get_language(language: Language = Depends(get_language_preference)):
    return LanguagePreference(language=language.value, direction=language.direction)


@router.put("/language", response_model=LanguagePreference)
async def set_language(
    preference: LanguagePreference,
    response: Response,
    current_user: Optional[UserProfile] = Depends(get_optional_user),
):
    """Persist the reader's choice in a cookie, and on the profile when signed in"""
    language = parse_language(preference.language)
    if language is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported language: {preference.language}",
        )
    response.set_cookie(
        settings.LANGUAGE_COOKIE_NAME,
        language.value,
        max_age=LANGUAGE_COOKIE_MAX_AGE,
        samesite="lax",
    )
    if current_user is not None:
        await profile_service.set_preferred_language(current_user.uid, language.value)
    return LanguagePreference(language=language.value, direction=language.direction)
