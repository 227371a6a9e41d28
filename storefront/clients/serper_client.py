"""
Singleton Serper.dev web search client with rate limiting using aiolimiter.
"""
import os
from typing import Any, Dict, Optional

from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from storefront.config import CONCURRENCY, SERPER_API_KEY, SERPER_URL


class SerperClient:
    """
    Singleton client for Google results via Serper.dev.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not SerperClient._initialized:
            api_key = SERPER_API_KEY or os.getenv("SERPER_API_KEY")
            if not api_key:
                raise ValueError("SERPER_API_KEY must be set in environment or config")

            self.api_key = api_key
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            SerperClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=30))
        return self._session

    async def search(self, query: str, num: int = 10, log=logger) -> Dict[str, Any]:
        """
        Run one search.

        Args:
            query: Search query.
            num: Number of organic results requested.
            log: loguru logger; callers may pass a bound logger.

        Returns:
            Parsed Serper response; hits live under `organic`.
        """
        async with self.rate_limiter:
            session = await self._get_session()
            headers = {
                "X-API-KEY": self.api_key,
                "Content-Type": "application/json",
            }
            body = {"q": query, "num": num, "gl": "us", "hl": "en"}

            try:
                async with session.post(SERPER_URL, headers=headers, json=body) as resp:
                    if resp.status != 200:
                        text = await resp.text()
                        raise Exception(f"Serper HTTP error {resp.status}: {text}")

                    data = await resp.json()
                    if data.get("error"):
                        raise Exception(f"Serper returned error: {data['error']}")
                    return data
            except Exception as e:
                log.debug(f"⚠️ Serper request failed: {e}")
                raise

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
