"""
FastAPI dependency injection for authentication and language preference
"""

import logging
from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional

from kalima.config import settings
from kalima.models.language import DEFAULT_LANGUAGE, Language, parse_language
from kalima.models.user import UserProfile
import kalima.services.auth_service as auth_module
from kalima.utils.security import verify_access_token

logger = logging.getLogger(__name__)

# Security scheme for Bearer tokens (Firebase ID token or internal JWT)
security = HTTPBearer()
# optional bearer that doesn't raise when missing
security_optional = HTTPBearer(auto_error=False)


async def _user_from_token(token: str) -> Optional[UserProfile]:
    """Firebase ID token first, then an internal access token"""
    try:
        decoded_token = auth_module.verify_id_token(token)
        firebase_uid = decoded_token.get("uid")
        if firebase_uid:
            return await auth_module.auth_service.get_current_user(firebase_uid)
        logger.debug("Firebase ID token decoded but missing UID")
    except ValueError as e:
        logger.debug(f"Firebase ID token rejected: {e}. Trying internal token next.")

    try:
        payload = verify_access_token(token)
    except JWTError as e:
        logger.debug(f"Internal token verification failed: {e}")
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None
    return await auth_module.auth_service.get_current_user(user_id)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UserProfile:
    """
    Dependency to get the current authenticated user's profile

    Raises:
        HTTPException: If the token is invalid or the profile is missing
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = credentials.credentials
    if not token:
        raise credentials_exception

    user = await _user_from_token(token)
    if user is None:
        raise credentials_exception
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> Optional[UserProfile]:
    """Current profile if a valid token was sent, None otherwise"""
    if not credentials or not credentials.credentials:
        return None
    return await _user_from_token(credentials.credentials)


async def require_admin(
    current_user: UserProfile = Depends(get_current_user),
) -> UserProfile:
    """Require the authoring capability"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions. Admin access required",
        )
    return current_user


async def get_language_preference(
    request: Request,
    current_user: Optional[UserProfile] = Depends(get_optional_user),
) -> Language:
    """
    Persisted language choice: cookie, then profile, then the default.

    Only used when the path itself carries no language segment.
    """
    cookie_value = request.cookies.get(settings.LANGUAGE_COOKIE_NAME)
    language = parse_language(cookie_value)
    if language is not None:
        return language
    if current_user is not None:
        language = parse_language(current_user.preferred_language)
        if language is not None:
            return language
    return DEFAULT_LANGUAGE



async def get_request_language(
    lang: Optional[str] = Query(None, description="Language code; overrides the stored preference"),
    preferred: Language = Depends(get_language_preference),
) -> Language:
    """Language for REST responses: explicit ?lang=, else the stored preference"""
    if lang is None:
        return preferred
    language = parse_language(lang)
    if language is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported language: {lang}",
        )
    return language
