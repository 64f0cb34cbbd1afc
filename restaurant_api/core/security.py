"""
Auth Token Verification

Tokens are HS256-signed JWTs carrying a ``userId`` claim and an ``exp``
claim. They are issued by the sign-in flow and stored client-side in the
``token`` cookie.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Optional

import jwt

from restaurant_api.core.config import get_settings
from restaurant_api.core.exceptions import InvalidToken

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "userId"


class TokenVerifier:
    """
    Verifies (and, for tooling, issues) signed auth tokens.

    The verifier owns the signing secret; nothing else in the application
    reads it.

    Example:
        >>> verifier = TokenVerifier(secret_key="s3cret")
        >>> token = verifier.issue(42)
        >>> verifier.verify(token)
        42
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
    ):
        if not secret_key:
            raise ValueError("secret_key is required to verify tokens")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, ttl: Optional[timedelta] = None) -> str:
        """Sign a token for ``user_id`` that expires after ``ttl``."""
        expires_at = datetime.now(timezone.utc) + (ttl if ttl is not None else self.ttl)
        payload: dict[str, Any] = {USER_ID_CLAIM: user_id, "exp": expires_at}
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Check signature and expiry and return the user id claim.

        Raises:
            InvalidToken: bad signature, expired, malformed, or missing claim
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired token")
            raise InvalidToken() from e
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected invalid token: {e}")
            raise InvalidToken() from e

        user_id = payload.get(USER_ID_CLAIM)
        if user_id is None:
            raise InvalidToken()
        try:
            return int(user_id)
        except (TypeError, ValueError) as e:
            raise InvalidToken() from e


@lru_cache()
def get_token_verifier() -> TokenVerifier:
    """
    Build the process-wide token verifier from settings.

    Raises:
        ValueError: If SECRET_KEY is not configured
    """
    settings = get_settings()
    return TokenVerifier(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )
