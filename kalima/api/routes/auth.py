"""
Authentication API endpoints
"""

import logging
from fastapi import APIRouter, HTTPException, status, Depends

from kalima.schemas.auth import (
    AuthResponse,
    AuthTokenRequest,
    Token,
    TokenRefresh,
    UserLogin,
    UserRegister,
)
from kalima.services.auth_service import auth_service
from kalima.dependencies import get_current_user
from kalima.models.user import UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def _auth_response(result: dict) -> AuthResponse:
    return AuthResponse(
        user=result["user"],
        tokens=Token(**result["tokens"]),
        id_token=result.get("id_token"),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister):
    """
    Create an account with email and password

    Creates the Firebase account and the profile document, and returns
    session tokens.
    """
    try:
        result = await auth_service.register_user(
            user_data.email, user_data.password, user_data.display_name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin):
    """Sign in with email and password"""
    try:
        result = await auth_service.login_with_email_password(credentials.email, credentials.password)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _auth_response(result)


@router.post("/verify-token", response_model=AuthResponse)
async def verify_token(payload: AuthTokenRequest):
    """
    Sign in with a Firebase ID token obtained client-side (Google etc.)

    - **idToken**: valid Firebase ID token from client
    """
    try:
        result = await auth_service.login_with_id_token(payload.id_token)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return _auth_response(result)


@router.post("/refresh", response_model=Token)
async def refresh_token(token_data: TokenRefresh):
    """Exchange a refresh token for a new token pair"""
    try:
        tokens = await auth_service.refresh_access_token(token_data.refresh_token)
    except Exception as e:
        logger.info(f"Refresh rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )
    return Token(**tokens)


@router.post("/logout")
async def logout(current_user: UserProfile = Depends(get_current_user)):
    """
    Sign out the current user

    Revokes Firebase refresh tokens; the client should discard its tokens.
    """
    revoked = await auth_service.logout_user(current_user.uid)
    return {"message": "Successfully logged out", "revoked": revoked}


@router.get("/me", response_model=UserProfile)
async def me(current_user: UserProfile = Depends(get_current_user)):
    """Current user's profile"""
    return current_user
