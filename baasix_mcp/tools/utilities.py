"""Utility tools: server information and manual item ordering."""

import logging
import platform
import time
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import Field

from .. import SERVER_NAME, __version__
from ..core.client import BaasixClient
from ..utils.errors import ApiError, AuthenticationError
from .base import NoArgs, ToolArgs, segment

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


class SortItemsArgs(ToolArgs):
    collection: str = Field(..., description="Collection name")
    item: str = Field(..., description="ID of item to move")
    to: str = Field(..., description="ID of target item to move before")


def _mcp_server_details(client: BaasixClient) -> dict[str, Any]:
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "python": platform.python_version(),
        "baasix_url": client.base_url,
    }


async def server_info(client: BaasixClient, args: NoArgs) -> dict[str, Any]:
    """Baasix health info plus details about this MCP server.

    A Baasix failure is reported in the payload instead of failing the tool,
    so the local details stay available while the backend is down.
    """
    details = _mcp_server_details(client)
    try:
        info = await client.get("/utils/info", public=True)
    except (ApiError, AuthenticationError, httpx.HTTPError) as e:
        logger.warning(f"Could not fetch Baasix server info: {e}")
        return {"error": "Could not fetch Baasix server info", "mcp_server": details}

    return {"baasix_server": info, "mcp_server": details}


async def sort_items(client: BaasixClient, args: SortItemsArgs) -> Any:
    return await client.post(
        f"/utils/sort/{segment(args.collection)}", args.payload("item", "to")
    )


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_server_info",
        "description": "Get Baasix server information and health status",
        "input_model": NoArgs,
        "handler": server_info,
    },
    {
        "name": "baasix_sort_items",
        "description": "Sort items within a collection (move item before/after another)",
        "input_model": SortItemsArgs,
        "handler": sort_items,
    },
]
