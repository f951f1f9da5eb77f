import httpx
import pytest

from kalima.config import settings
from kalima.services.image_search import ImageSearchService


@pytest.mark.asyncio
async def test_random_photo_returns_regular_url():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"urls": {"regular": "https://images.example/cat.jpg"}})

    service = ImageSearchService(transport=httpx.MockTransport(handler))

    assert await service.random_photo("cat") == "https://images.example/cat.jpg"
    assert seen[0].url.path == "/photos/random"
    assert seen[0].url.params["query"] == "cat"
    assert seen[0].headers["Authorization"].startswith("Client-ID")


@pytest.mark.asyncio
async def test_random_photo_falls_back_on_error():
    service = ImageSearchService(transport=httpx.MockTransport(lambda request: httpx.Response(403)))

    assert await service.random_photo("cat") == settings.FALLBACK_IMAGE_URL


@pytest.mark.asyncio
async def test_search_photos_empty_on_error():
    def handler(request):
        raise httpx.ConnectError("offline")

    service = ImageSearchService(transport=httpx.MockTransport(handler))

    assert await service.search_photos("cat") == []
