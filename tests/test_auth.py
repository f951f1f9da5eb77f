from unittest.mock import AsyncMock, patch

import httpx
import pytest
from jose import JWTError

from kalima.config import settings
from kalima.models.user import UserProfile
from kalima.services.auth_service import AuthService
from kalima.services.favorites import ProfileService
from kalima.utils.security import create_token_pair, verify_access_token, verify_refresh_token


def test_token_pair_round_trip():
    tokens = create_token_pair("u1", "reader@example.com", is_admin=True)

    access = verify_access_token(tokens["access_token"])
    assert access["sub"] == "u1"
    assert access["admin"] is True
    assert verify_refresh_token(tokens["refresh_token"])["sub"] == "u1"
    assert tokens["expires_in"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


def test_refresh_token_is_not_an_access_token():
    tokens = create_token_pair("u1", "reader@example.com")

    with pytest.raises(JWTError):
        verify_access_token(tokens["refresh_token"])


@pytest.fixture
def profiles():
    service = AsyncMock(spec=ProfileService)
    service.ensure_profile.side_effect = lambda uid, email="", display_name="": UserProfile(
        uid=uid, email=email, display_name=display_name)
    return service


@pytest.fixture
def web_api_key():
    with patch.object(settings, "FIREBASE_WEB_API_KEY", "test-key"):
        yield


def _transport(status_code, body, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body)
    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_login_with_email_password(profiles, web_api_key):
    seen = []
    service = AuthService(profiles, transport=_transport(
        200, {"localId": "u1", "email": "reader@example.com", "idToken": "firebase-id"}, seen))

    result = await service.login_with_email_password("reader@example.com", "secret123")

    assert result["user"].uid == "u1"
    assert result["id_token"] == "firebase-id"
    assert verify_access_token(result["tokens"]["access_token"])["sub"] == "u1"
    assert seen[0].url.path == "/v1/accounts:signInWithPassword"
    assert seen[0].url.params["key"] == "test-key"


@pytest.mark.asyncio
async def test_register_creates_profile(profiles, web_api_key):
    service = AuthService(profiles, transport=_transport(200, {"localId": "u2", "idToken": "t"}))

    result = await service.register_user("new@example.com", "secret123", "Amira")

    assert result["user"].display_name == "Amira"
    profiles.ensure_profile.assert_awaited_once_with("u2", email="new@example.com", display_name="Amira")


@pytest.mark.asyncio
async def test_rejected_credentials_raise_value_error(profiles, web_api_key):
    service = AuthService(profiles, transport=_transport(400, {"error": {"message": "INVALID_LOGIN_CREDENTIALS"}}))

    with pytest.raises(ValueError, match="INVALID_LOGIN_CREDENTIALS"):
        await service.login_with_email_password("reader@example.com", "wrong")

    profiles.ensure_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_api_key(profiles):
    with patch.object(settings, "FIREBASE_WEB_API_KEY", ""):
        with pytest.raises(ValueError):
            await AuthService(profiles).login_with_email_password("reader@example.com", "secret123")


@pytest.mark.asyncio
async def test_login_with_id_token(profiles):
    with patch("kalima.services.auth_service.verify_id_token", return_value={"uid": "g1", "email": "g@example.com"}):
        result = await AuthService(profiles).login_with_id_token("google-token")

    assert result["user"].uid == "g1"


@pytest.mark.asyncio
async def test_refresh_needs_existing_profile(profiles):
    tokens = create_token_pair("ghost", "ghost@example.com")
    profiles.get_profile.return_value = None

    with pytest.raises(JWTError):
        await AuthService(profiles).refresh_access_token(tokens["refresh_token"])


@pytest.mark.asyncio
async def test_logout_revokes_refresh_tokens(profiles):
    with patch("kalima.services.auth_service.firebase_auth.revoke_refresh_tokens") as revoke:
        assert await AuthService(profiles).logout_user("u1") is True

    revoke.assert_called_once_with("u1")
