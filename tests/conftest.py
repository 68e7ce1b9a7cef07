"""Shared fixtures for the Baasix MCP server tests."""

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from baasix_mcp.core.auth import AuthManager
from baasix_mcp.core.client import BaasixClient
from baasix_mcp.core.config import Credentials

BASE_URL = "https://baasix.example.com"


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    method: str = "GET",
    path: str = "/",
    text: str | None = None,
) -> httpx.Response:
    """Build a real httpx response bound to a request."""
    request = httpx.Request(method, f"{BASE_URL}{path}")
    if text is not None:
        return httpx.Response(status_code, text=text, request=request)
    if json_data is None:
        return httpx.Response(status_code, request=request)
    return httpx.Response(status_code, json=json_data, request=request)


def login_response(token: str) -> httpx.Response:
    return make_response(200, {"token": token, "user": {"id": "u1"}}, "POST", "/auth/login")


class FakeClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_credentials():
    return Credentials(base_url=BASE_URL, explicit_token="explicit-token")


@pytest.fixture
def login_credentials():
    return Credentials(base_url=BASE_URL, email="a@b.com", password="x")


@pytest.fixture
def anonymous_credentials():
    return Credentials(base_url=BASE_URL)


@pytest.fixture
def mock_http():
    """Patch httpx.AsyncClient; yields the client used inside ``async with``."""
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client_class.return_value.__aenter__.return_value = mock_client
        mock_client_class.return_value.__aexit__.return_value = None
        mock_client.client_class = mock_client_class
        yield mock_client


@pytest.fixture
def token_client(token_credentials):
    return BaasixClient(AuthManager(token_credentials))


@pytest.fixture
def login_client(login_credentials, clock):
    return BaasixClient(AuthManager(login_credentials, clock=clock))


@pytest.fixture
def anonymous_client(anonymous_credentials):
    return BaasixClient(AuthManager(anonymous_credentials))
