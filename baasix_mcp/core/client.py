"""HTTP client for the Baasix REST API.

Every request gets a bearer token from the ``AuthManager``.  When Baasix
rejects a login-issued token with 401 the token is dropped, a new one is
obtained and the request is retried exactly once.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..utils.errors import ApiError, AuthenticationError
from .auth import AuthManager, AuthMode
from .http import error_message, response_body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiRequest:
    """A single call against the Baasix REST API."""

    endpoint: str
    method: str = "GET"
    params: dict[str, Any] | None = None
    body: Any = None
    headers: dict[str, str] | None = None
    # Endpoints Baasix serves without a token (login, register, ...)
    public: bool = False


class BaasixClient:
    """Executes authenticated requests against a Baasix server."""

    def __init__(self, auth: AuthManager):
        """
        Initialize the client.

        Args:
            auth: Auth manager that supplies bearer tokens
        """
        self.auth = auth
        self.base_url = auth.credentials.base_url
        self.timeout = auth.credentials.timeout

    async def _token_for(self, request: ApiRequest) -> str | None:
        if request.public and not self.auth.can_authenticate:
            return None
        return await self.auth.get_token()

    def _build_headers(self, request: ApiRequest, token: str | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if request.headers:
            headers.update(request.headers)
        return headers

    async def _send(self, request: ApiRequest, token: str | None) -> httpx.Response:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            return await client.request(
                request.method,
                request.endpoint,
                params=request.params or None,
                json=request.body,
                headers=self._build_headers(request, token),
            )

    async def execute(self, request: ApiRequest) -> Any:
        """
        Execute a request and return the decoded response body.

        Args:
            request: Request to send

        Returns:
            Decoded JSON body (or text) exactly as Baasix returned it

        Raises:
            AuthenticationError: If no token can be obtained
            ApiError: If Baasix answers with a non-success status, or if the
                re-login after a rejected token fails
            httpx.RequestError: If the server cannot be reached
        """
        token = await self._token_for(request)
        logger.debug(f"{request.method} {request.endpoint}")
        response = await self._send(request, token)

        if (
            response.status_code == 401
            and token is not None
            and self.auth.mode is AuthMode.LOGIN
        ):
            logger.info(f"Token rejected for {request.method} {request.endpoint}, re-authenticating")
            self.auth.invalidate(token)
            try:
                token = await self.auth.get_token()
            except AuthenticationError as e:
                # The retry could not happen: report the original rejection
                raise ApiError(response.status_code, str(e)) from e
            response = await self._send(request, token)

        if not response.is_success:
            logger.warning(
                f"Baasix returned HTTP {response.status_code} for {request.method} {request.endpoint}"
            )
            raise ApiError(response.status_code, error_message(response))

        return response_body(response)

    async def get(self, endpoint: str, params: dict[str, Any] | None = None, **kwargs) -> Any:
        return await self.execute(ApiRequest(endpoint, "GET", params=params, **kwargs))

    async def post(self, endpoint: str, body: Any = None, **kwargs) -> Any:
        return await self.execute(ApiRequest(endpoint, "POST", body=body, **kwargs))

    async def put(self, endpoint: str, body: Any = None, **kwargs) -> Any:
        return await self.execute(ApiRequest(endpoint, "PUT", body=body, **kwargs))

    async def patch(self, endpoint: str, body: Any = None, **kwargs) -> Any:
        return await self.execute(ApiRequest(endpoint, "PATCH", body=body, **kwargs))

    async def delete(self, endpoint: str, **kwargs) -> Any:
        return await self.execute(ApiRequest(endpoint, "DELETE", **kwargs))
