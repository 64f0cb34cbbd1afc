"""
Core module initialization.
Exports configuration and token utilities.
"""

from restaurant_api.core.config import get_settings, Settings, EnvironmentMode
from restaurant_api.core.security import TokenVerifier, get_token_verifier

__all__ = ["get_settings", "Settings", "EnvironmentMode", "TokenVerifier", "get_token_verifier"]
