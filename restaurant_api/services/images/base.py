"""
Image Service Abstract Base Class

Defines the interface contract for image hosting gateways.
Both MockImageService and CloudinaryImageService implement these methods.

A gateway takes the raw bytes of an uploaded file and returns the public
URL it is hosted at. Failures raise ImageUploadError; callers do not
retry and nothing is cleaned up on the hosting side.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ImageFile:
    """
    An image received in a multipart request.

    Attributes:
        content: Raw file bytes
        filename: Client-supplied file name
        content_type: MIME type reported by the client
    """
    content: bytes
    filename: str = "upload"
    content_type: str = "application/octet-stream"

    def to_data_uri(self) -> str:
        """Encode as a ``data:`` URI, the form Cloudinary accepts inline."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


class BaseImageService(ABC):
    """
    Abstract base class for image hosting gateways.

    Example:
        >>> service = get_image_service()
        >>> url = await service.upload(ImageFile(content=b"...", filename="dish.jpg"))
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the image provider.

        Returns:
            str: Provider name (e.g., "mock", "cloudinary")
        """
        pass

    @abstractmethod
    async def upload(self, image: ImageFile) -> str:
        """
        Host an image and return its public URL.

        Raises:
            ImageUploadError: If the provider did not accept the image
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the image provider.

        Returns:
            bool: True if service is operational
        """
        pass
