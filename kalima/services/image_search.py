"""
Unsplash photo lookup used when authoring articles
"""

import logging
from typing import Any, Optional

import httpx

from kalima.config import settings

logger = logging.getLogger(__name__)


class ImageSearchService:
    """Thin Unsplash client; lookups never raise, they degrade"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=settings.UNSPLASH_API_URL,
            headers={"Authorization": f"Client-ID {settings.UNSPLASH_ACCESS_KEY}"},
            transport=self.transport,
            timeout=10.0,
        )

    async def random_photo(self, query: str) -> str:
        """URL of a random photo for `query`, or the fallback image on any failure"""
        try:
            async with self._client() as client:
                response = await client.get("/photos/random", params={"query": query})
                response.raise_for_status()
                return response.json()["urls"]["regular"]
        except Exception as e:
            logger.error(f"Error fetching random image from Unsplash: {e}")
            return settings.FALLBACK_IMAGE_URL

    async def search_photos(self, query: str, per_page: int = 1) -> list[dict[str, Any]]:
        try:
            async with self._client() as client:
                response = await client.get(
                    "/search/photos", params={"query": query, "per_page": per_page})
                response.raise_for_status()
                return response.json().get("results", [])
        except Exception as e:
            logger.error(f"Error fetching images from Unsplash: {e}")
            return []


image_search_service = ImageSearchService()
