"""
Mock Image Service Implementation

Simulates Cloudinary uploads without making real API calls.
Used in development mode (ENV_MODE=development) and by the test suite.

Behavior:
    - Returns a unique, stable-looking URL per upload
    - Remembers every upload so tests can inspect what was sent
    - Optional latency and failure rate for exercising error handling
"""

import asyncio
import logging
import random
import uuid

from restaurant_api.core.exceptions import ImageUploadError
from restaurant_api.services.images.base import BaseImageService, ImageFile

logger = logging.getLogger(__name__)


class MockImageService(BaseImageService):
    """
    Mock implementation of the image gateway.

    Attributes:
        failure_rate: Probability of simulated upload failure (0.0-1.0)
        min_latency: Minimum simulated response time in seconds
        max_latency: Maximum simulated response time in seconds
        base_url: Prefix of the URLs handed out
        uploads: Every image accepted so far, in order
    """

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
        base_url: str = "https://res.cloudinary.mock/image/upload",
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.base_url = base_url.rstrip("/")
        self.uploads: list[ImageFile] = []

        logger.info(
            f"MockImageService initialized "
            f"(failure_rate={failure_rate:.0%}, "
            f"latency={min_latency}-{max_latency}s)"
        )

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def upload(self, image: ImageFile) -> str:
        await self._simulate_latency()

        if self._should_fail():
            logger.debug("Mock: Simulated upload failure")
            raise ImageUploadError("Image hosting temporarily unavailable")

        self.uploads.append(image)
        url = f"{self.base_url}/{uuid.uuid4().hex}/{image.filename}"
        logger.debug(f"Mock: Uploaded {image.filename} ({len(image.content)} bytes) -> {url}")
        return url

    async def health_check(self) -> bool:
        """Mock health check always returns True."""
        return True
