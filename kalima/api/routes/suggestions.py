"""Reader suggestion API routes"""

from fastapi import APIRouter, Depends, HTTPException, status

from kalima.dependencies import get_current_user
from kalima.models.language import SUPPORTED_LANGUAGES
from kalima.models.user import SuggestedArticle, UserProfile
from kalima.services.favorites import profile_service, suggestions_of

router = APIRouter(prefix="/api/v1/suggestions", tags=["Suggestions"])


@router.get("/", response_model=list[SuggestedArticle])
async def my_suggestions(current_user: UserProfile = Depends(get_current_user)):
    return suggestions_of(current_user)


@router.post("/", response_model=SuggestedArticle, status_code=status.HTTP_201_CREATED)
async def submit_suggestion(
    suggestion: SuggestedArticle,
    current_user: UserProfile = Depends(get_current_user),
):
    """Propose an article idea for the editors"""
    if suggestion.language not in SUPPORTED_LANGUAGES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported language: {suggestion.language}",
        )
    await profile_service.add_suggestion(current_user.uid, suggestion)
    return suggestion
