"""
Singleton Google Cloud Vision client with rate limiting using aiolimiter.
"""
import os
from base64 import b64encode
from typing import Any, Dict, Optional

from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from storefront.config import CONCURRENCY, GOOGLE_VISION_API_KEY, VISION_URL
from storefront.models import RawTextBlock


class VisionClient:
    """
    Singleton OCR client for Cloud Vision TEXT_DETECTION requests.
    Uses AsyncLimiter for rate limiting instead of semaphores.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not VisionClient._initialized:
            api_key = GOOGLE_VISION_API_KEY or os.getenv("GOOGLE_VISION_API_KEY")
            if not api_key:
                raise ValueError("GOOGLE_VISION_API_KEY must be set in environment or config")

            self.api_key = api_key
            self.base_url = VISION_URL
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            VisionClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=60))
        return self._session

    async def annotate(self, image_bytes: bytes, log=logger) -> Dict[str, Any]:
        """
        Run TEXT_DETECTION on one image.

        Args:
            image_bytes: Raw image file content.

        Returns:
            The first entry of the Vision `responses` array.
        """
        async with self.rate_limiter:
            session = await self._get_session()
            payload = {
                "requests": [{
                    "image": {"content": b64encode(image_bytes).decode("ascii")},
                    "features": [{"type": "TEXT_DETECTION"}],
                }]
            }

            try:
                async with session.post(
                    self.base_url,
                    params={"key": self.api_key},
                    json=payload,
                    timeout=ClientTimeout(total=60)
                ) as resp:
                    data = await resp.json()

                    if "error" in data:
                        error = data["error"]
                        raise Exception(
                            f"Vision API error ({error.get('status', 'unknown')}): "
                            f"{error.get('message', 'no details')}"
                        )

                    response = (data.get("responses") or [{}])[0]
                    if "error" in response:
                        raise Exception(f"Vision annotation error: {response['error'].get('message', 'no details')}")
                    return response
            except Exception as e:
                log.debug(f"⚠️ Vision request failed: {e}")
                raise

    async def detect_text(self, image_bytes: bytes, log=logger) -> RawTextBlock:
        """
        OCR one image into a RawTextBlock.

        The first annotation holds the full text; the detection count is the
        number of annotations returned.
        """
        response = await self.annotate(image_bytes, log=log)
        annotations = response.get("textAnnotations") or []
        full_text = annotations[0].get("description", "") if annotations else ""
        return RawTextBlock(full_text=full_text, detection_count=len(annotations))

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
