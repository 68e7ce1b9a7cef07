"""Core components: configuration, authentication and the Baasix HTTP client."""

from .auth import AuthManager, AuthMode, CachedToken
from .client import ApiRequest, BaasixClient
from .config import Credentials, Settings, load_settings

__all__ = [
    "AuthManager",
    "AuthMode",
    "CachedToken",
    "ApiRequest",
    "BaasixClient",
    "Credentials",
    "Settings",
    "load_settings",
]
