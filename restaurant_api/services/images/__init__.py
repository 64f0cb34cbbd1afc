"""
Image Service Factory

Provides a single entry point for obtaining an image gateway instance.
Automatically selects Mock or Cloudinary based on ENV_MODE configuration.

Usage:
    from restaurant_api.services.images import get_image_service

    image_service = get_image_service()
    url = await image_service.upload(ImageFile(content=data, filename="dish.jpg"))
"""

import logging
from functools import lru_cache

from restaurant_api.core.config import get_settings
from restaurant_api.services.images.base import BaseImageService, ImageFile
from restaurant_api.services.images.mock import MockImageService
from restaurant_api.services.images.cloudinary import CloudinaryImageService

logger = logging.getLogger(__name__)


@lru_cache()
def get_image_service() -> BaseImageService:
    """
    Get the configured image service instance.

    Returns:
        BaseImageService: MockImageService in development,
        CloudinaryImageService otherwise

    Raises:
        ValueError: If production mode but Cloudinary is not configured
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Image Service: Using MockImageService (development mode)")
        return MockImageService(min_latency=0.05, max_latency=0.2)
    else:
        logger.info(
            f"Image Service: Using CloudinaryImageService "
            f"({settings.env_mode.value} mode)"
        )
        return CloudinaryImageService()


def reset_image_service() -> None:
    """
    Clear the cached image service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_image_service.cache_clear()
    logger.debug("Image service cache cleared")


__all__ = [
    "get_image_service",
    "reset_image_service",
    "BaseImageService",
    "ImageFile",
    "MockImageService",
    "CloudinaryImageService",
]
