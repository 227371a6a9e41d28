"""
Singleton Google Places client with rate limiting using aiolimiter.
"""
import os
from typing import Any, Dict, Optional

from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from storefront.config import CONCURRENCY, GOOGLE_PLACES_API_KEY, PLACES_DETAILS_URL, PLACES_TEXT_SEARCH_URL

DETAIL_FIELDS = [
    "name",
    "formatted_address",
    "international_phone_number",
    "website",
    "business_status",
    "opening_hours",
    "rating",
    "user_ratings_total",
    "price_level",
    "types",
    "geometry",
]


class PlacesClient:
    """
    Singleton directory lookup client for the Places text search and
    details endpoints.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not PlacesClient._initialized:
            api_key = GOOGLE_PLACES_API_KEY or os.getenv("GOOGLE_PLACES_API_KEY")
            if not api_key:
                raise ValueError("GOOGLE_PLACES_API_KEY must be set in environment or config")

            self.api_key = api_key
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            PlacesClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=30))
        return self._session

    async def _get_json(self, url: str, params: Dict[str, str], log=logger) -> Dict[str, Any]:
        async with self.rate_limiter:
            session = await self._get_session()
            try:
                async with session.get(url, params={**params, "key": self.api_key}) as resp:
                    if resp.status != 200:
                        raise Exception(f"Places request failed: HTTP {resp.status} {resp.reason}")
                    return await resp.json()
            except Exception as e:
                log.debug(f"⚠️ Places request failed: {e}")
                raise

    async def text_search(self, query: str, log=logger) -> Dict[str, Any]:
        """
        Free-text place search.

        Returns:
            Raw response with `status` and `results`.
        """
        return await self._get_json(PLACES_TEXT_SEARCH_URL, {"query": query}, log=log)

    async def place_details(self, place_id: str, log=logger) -> Dict[str, Any]:
        """
        Fetch listing details for one place.

        Returns:
            Raw response with `status` and `result`.
        """
        return await self._get_json(
            PLACES_DETAILS_URL, {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS)}, log=log
        )

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
