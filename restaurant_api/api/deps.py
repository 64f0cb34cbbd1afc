"""
Shared route dependencies: cookie authentication and upload handling.
"""

import logging
from typing import Optional

from fastapi import Depends, Request, UploadFile

from restaurant_api.core.config import Settings, get_settings
from restaurant_api.core.exceptions import InternalError, InvalidToken, Unauthenticated
from restaurant_api.core.security import TokenVerifier, get_token_verifier
from restaurant_api.services.images import ImageFile

logger = logging.getLogger(__name__)


async def is_authenticated(
    request: Request,
    verifier: TokenVerifier = Depends(get_token_verifier),
    settings: Settings = Depends(get_settings),
) -> int:
    """
    Resolve the calling user from the auth cookie.

    The user id is also stored on ``request.state.user_id`` for the rest
    of the request.

    Raises:
        Unauthenticated: No token cookie was sent
        InvalidToken: The token failed signature, expiry or claim checks
        InternalError: Verification failed unexpectedly
    """
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise Unauthenticated()

    try:
        user_id = verifier.verify(token)
    except InvalidToken:
        raise
    except Exception as e:
        logger.exception(f"Token verification error: {e}")
        raise InternalError() from e

    request.state.user_id = user_id
    return user_id


async def read_image(upload: Optional[UploadFile]) -> Optional[ImageFile]:
    """Read an uploaded file into memory; an empty upload counts as absent."""
    if upload is None:
        return None

    content = await upload.read()
    if not content:
        return None

    return ImageFile(
        content=content,
        filename=upload.filename or "upload",
        content_type=upload.content_type or "application/octet-stream",
    )
