"""
Authentication service: Firebase identity plus internal session tokens

Email/password sign up and sign in go through the Identity Toolkit REST
API; every successful authentication makes sure a profile document exists.
"""

import asyncio
import logging
from typing import Dict, Any, Optional

import httpx
from firebase_admin import auth as firebase_auth
from jose import JWTError

from kalima.config import settings
from kalima.models.user import UserProfile
from kalima.services.favorites import ProfileService, profile_service as default_profile_service
from kalima.utils.security import create_token_pair, verify_refresh_token

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


def verify_id_token(id_token: str) -> dict:
    """Convenience wrapper to verify Firebase ID tokens"""
    try:
        return firebase_auth.verify_id_token(id_token)
    except Exception as e:
        # Re-raise for the dependency that calls this
        raise ValueError(f"Firebase ID token verification failed: {e}") from e


class AuthService:
    """Service for authentication operations"""

    def __init__(
        self,
        profiles: Optional[ProfileService] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.profiles = profiles or default_profile_service
        self.transport = transport

    async def _identity_toolkit(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        api_key = settings.FIREBASE_WEB_API_KEY
        if not api_key:
            raise ValueError("Firebase Web API key not configured")

        url = f"{IDENTITY_TOOLKIT_URL}/accounts:{method}"
        async with httpx.AsyncClient(transport=self.transport, timeout=10.0) as client:
            response = await client.post(url, params={"key": api_key}, json={**payload, "returnSecureToken": True})

        if response.status_code != 200:
            try:
                error_msg = response.json().get("error", {}).get("message", "Unknown error")
            except ValueError:
                error_msg = response.text or "Unknown error"
            logger.info(f"Identity Toolkit {method} rejected: {error_msg}")
            raise ValueError(f"Authentication failed: {error_msg}")

        return response.json()

    async def _session_for(self, uid: str, email: str, display_name: str = "") -> Dict[str, Any]:
        user = await self.profiles.ensure_profile(uid, email=email, display_name=display_name)
        tokens = create_token_pair(user_id=user.uid, email=user.email, is_admin=user.is_admin)
        return {"user": user, "tokens": tokens}

    async def register_user(self, email: str, password: str, display_name: str = "") -> Dict[str, Any]:
        """
        Create a Firebase account and its profile document

        Raises:
            ValueError: If the email is taken or the password is rejected
        """
        payload = {"email": email, "password": password}
        if display_name:
            payload["displayName"] = display_name
        data = await self._identity_toolkit("signUp", payload)

        result = await self._session_for(data.get("localId", ""), email, display_name)
        result["id_token"] = data.get("idToken")
        logger.info(f"Registered user {result['user'].uid}")
        return result

    async def login_with_email_password(self, email: str, password: str) -> Dict[str, Any]:
        """
        Authenticate with email and password via Firebase REST API.

        Returns:
            Dictionary containing user, internal tokens and the Firebase ID token
        """
        data = await self._identity_toolkit("signInWithPassword", {"email": email, "password": password})
        result = await self._session_for(
            data.get("localId", ""), data.get("email", email), data.get("displayName", ""))
        result["id_token"] = data.get("idToken")
        return result

    async def login_with_id_token(self, id_token: str) -> Dict[str, Any]:
        """Sign in with a client-side Firebase ID token (social providers)"""
        decoded_token = verify_id_token(id_token)
        uid = decoded_token.get("uid")
        if not uid:
            raise ValueError("Firebase ID token missing UID.")
        email = decoded_token.get("email", "")
        result = await self._session_for(uid, email, decoded_token.get("name", ""))
        result["id_token"] = id_token
        return result

    async def refresh_access_token(self, refresh_token: str) -> Dict[str, Any]:
        """
        Generate new tokens from a refresh token

        Raises:
            JWTError: If refresh token is invalid or the profile is gone
        """
        payload = verify_refresh_token(refresh_token)
        user_id = payload.get("sub")
        if not user_id:
            raise JWTError("Invalid token payload")

        user = await self.profiles.get_profile(user_id)
        if not user:
            raise JWTError("User not found")

        return create_token_pair(user_id=user.uid, email=user.email, is_admin=user.is_admin)

    async def logout_user(self, user_id: str) -> bool:
        """Revoke the user's Firebase refresh tokens; the client drops its session"""
        try:
            await asyncio.to_thread(firebase_auth.revoke_refresh_tokens, user_id)
        except Exception as e:
            logger.warning(f"Could not revoke refresh tokens for {user_id}: {e}")
            return False
        logger.info(f"Signed out user {user_id}")
        return True

    async def get_current_user(self, user_id: str) -> Optional[UserProfile]:
        return await self.profiles.get_profile(user_id)


auth_service = AuthService()
