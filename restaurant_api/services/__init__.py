"""
                        Services Module

External collaborators behind the Mock/Real pattern.
Each service has a Mock (development) and a Real (production) implementation.

Services:
    - images: Cloudinary image hosting
"""

from restaurant_api.services.images import get_image_service

__all__ = ["get_image_service"]
