"""
Cloudinary Image Service Implementation

Production implementation using the Cloudinary upload API.
Used when ENV_MODE=production or ENV_MODE=staging.

Requirements:
    - CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET
      must be set in environment

API Documentation:
    https://cloudinary.com/documentation/image_upload_api_reference
"""

import asyncio
import logging

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from restaurant_api.core.config import get_settings
from restaurant_api.core.exceptions import ImageUploadError
from restaurant_api.services.images.base import BaseImageService, ImageFile

logger = logging.getLogger(__name__)


class CloudinaryImageService(BaseImageService):
    """
    Production image gateway backed by Cloudinary.

    Images are sent inline as base64 data URIs; the ``secure_url`` of the
    stored asset is returned.
    """

    def __init__(self):
        """
        Configure the Cloudinary SDK from settings.

        Raises:
            ValueError: If Cloudinary credentials are not configured
        """
        settings = get_settings()

        if not (
            settings.cloudinary_cloud_name
            and settings.cloudinary_api_key
            and settings.cloudinary_api_secret
        ):
            raise ValueError(
                "CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET "
                "are required for production mode."
            )

        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True,
        )
        self._folder = settings.cloudinary_folder

        logger.info("CloudinaryImageService initialized")

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    async def upload(self, image: ImageFile) -> str:
        options = {"resource_type": "image"}
        if self._folder:
            options["folder"] = self._folder

        logger.debug(f"Cloudinary: Uploading {image.filename} ({len(image.content)} bytes)")

        try:
            # The SDK is synchronous; keep it off the event loop
            result = await asyncio.to_thread(
                cloudinary.uploader.upload, image.to_data_uri(), **options
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary: Upload failed - {e}")
            raise ImageUploadError(str(e)) from e

        url = result.get("secure_url")
        if not url:
            raise ImageUploadError("Cloudinary response did not include secure_url")

        logger.info(f"Cloudinary: Uploaded {image.filename} as {result.get('public_id')}")
        return url

    async def health_check(self) -> bool:
        try:
            await asyncio.to_thread(cloudinary.api.ping)
            return True
        except Exception as e:
            logger.error(f"Cloudinary health check failed: {e}")
            return False
