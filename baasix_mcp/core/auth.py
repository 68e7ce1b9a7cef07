"""Authentication token lifecycle for the Baasix backend.

The ``AuthManager`` owns the only mutable credential state in the server:
the token obtained by logging in with email/password and its expiry.  An
explicit ``BAASIX_AUTH_TOKEN`` bypasses the cache entirely.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, Field

from ..utils.errors import AuthenticationError
from .config import Credentials
from .http import error_message

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=1)
LOGIN_ENDPOINT = "/auth/login"
NO_AUTH_MESSAGE = (
    "No authentication method available. "
    "Please provide BAASIX_AUTH_TOKEN or BAASIX_EMAIL/BAASIX_PASSWORD"
)


class AuthMode(str, Enum):
    """How the server authenticates against Baasix."""

    TOKEN = "Manual Token"
    LOGIN = "Auto-login"
    NONE = "None"


class CachedToken(BaseModel):
    """Token obtained through the login exchange."""

    value: str = Field(..., repr=False)
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return now < self.expires_at


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthManager:
    """
    Produces a usable Baasix token on demand.

    Resolution order:
    1. Explicit token (never expires, never refreshed)
    2. Cached login token that has not expired
    3. Fresh login exchange with email/password (cached for one hour)

    Concurrent callers that find the cache empty share a single login
    exchange: the login runs under a lock and the cache is re-checked once
    the lock is held.
    """

    def __init__(
        self,
        credentials: Credentials,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the auth manager.

        Args:
            credentials: Resolved connection credentials
            clock: Source of the current time (timezone-aware)
        """
        self.credentials = credentials
        self._clock = clock
        self._cached: CachedToken | None = None
        self._refresh_lock = asyncio.Lock()

    @property
    def mode(self) -> AuthMode:
        if self.credentials.has_explicit_token:
            return AuthMode.TOKEN
        if self.credentials.has_login:
            return AuthMode.LOGIN
        return AuthMode.NONE

    @property
    def can_authenticate(self) -> bool:
        return self.mode is not AuthMode.NONE

    @property
    def token_expires_at(self) -> datetime | None:
        return self._cached.expires_at if self._cached else None

    def _valid_cached_token(self) -> str | None:
        if self._cached and self._cached.is_valid(self._clock()):
            return self._cached.value
        return None

    async def get_token(self) -> str:
        """
        Get a currently valid token.

        Returns:
            Bearer token for the Baasix API

        Raises:
            AuthenticationError: If no credential is configured or login fails
        """
        if self.credentials.has_explicit_token:
            return self.credentials.explicit_token

        token = self._valid_cached_token()
        if token:
            return token

        if not self.credentials.has_login:
            raise AuthenticationError(NO_AUTH_MESSAGE)

        async with self._refresh_lock:
            # Another invocation may have logged in while we waited
            token = self._valid_cached_token()
            if token:
                return token
            return await self._login()

    async def _login(self) -> str:
        """Exchange email/password for a token and cache it."""
        logger.info(f"Logging in to Baasix as {self.credentials.email}")

        try:
            async with httpx.AsyncClient(
                base_url=self.credentials.base_url, timeout=self.credentials.timeout
            ) as client:
                response = await client.post(
                    LOGIN_ENDPOINT,
                    json={
                        "email": self.credentials.email,
                        "password": self.credentials.password,
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Authentication failed: {error_message(e.response)}"
            ) from e
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Authentication failed: {e}") from e
        except ValueError as e:
            raise AuthenticationError("Authentication failed: login response was not JSON") from e

        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise AuthenticationError("Authentication failed: login response did not include a token")

        self._cached = CachedToken(value=token, expires_at=self._clock() + TOKEN_TTL)
        logger.info(f"Baasix login succeeded, token valid until {self._cached.expires_at.isoformat()}")
        return token

    def invalidate(self, token: str | None = None) -> bool:
        """
        Drop the cached login token.

        Args:
            token: If given, only drop the cache while it still holds this
                token (a newer token obtained by a concurrent refresh is kept)

        Returns:
            True if the cache was cleared, False if this was a no-op
        """
        if self.credentials.has_explicit_token:
            logger.debug("Explicit token in use, ignoring invalidation")
            return False

        if token is not None and self._cached is not None and self._cached.value != token:
            logger.debug("Cached token already replaced, keeping it")
            return False

        self._cached = None
        return True

    async def force_refresh(self) -> str:
        """Invalidate the cache and obtain a new token."""
        self.invalidate()
        return await self.get_token()

    async def status(self) -> dict[str, Any]:
        """Report the authentication state without raising."""
        configured_user = self.credentials.email or "Not configured"
        manual_token_provided = self.credentials.has_explicit_token

        try:
            token = await self.get_token()
        except AuthenticationError as e:
            return {
                "error": str(e),
                "auth_method": AuthMode.NONE.value,
                "manual_token_provided": manual_token_provided,
                "configured_user": configured_user,
            }

        expires_at = self.token_expires_at
        return {
            "auth_method": self.mode.value,
            "configured_user": configured_user,
            "manual_token_provided": manual_token_provided,
            "authenticated": bool(token),
            "auto_login_expires": expires_at.isoformat() if expires_at else "N/A",
            "auto_login_valid": self._valid_cached_token() is not None,
        }
