"""
Authentication request/response schemas
"""

from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional

from kalima.models.user import UserProfile


class UserRegister(BaseModel):
    """Schema for email/password registration"""

    email: EmailStr
    password: str = Field(
        ..., min_length=6, description="Firebase requires at least 6 characters"
    )
    display_name: str = Field("", max_length=100, alias="displayName")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "reader@example.com",
                "password": "secret123",
                "displayName": "Amira",
            }
        }
    )


class UserLogin(BaseModel):
    """Schema for email/password sign in"""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "reader@example.com", "password": "secret123"}
        }
    )


class AuthTokenRequest(BaseModel):
    """Schema for requests carrying a Firebase ID token (Google sign in etc.)"""

    id_token: str = Field(..., alias="idToken")

    model_config = ConfigDict(populate_by_name=True)


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class TokenRefresh(BaseModel):
    refresh_token: str


class AuthResponse(BaseModel):
    """Profile plus session tokens"""

    user: UserProfile
    tokens: Token
    id_token: Optional[str] = Field(None, alias="idToken")

    model_config = ConfigDict(populate_by_name=True)
