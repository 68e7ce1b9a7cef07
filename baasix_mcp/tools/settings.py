"""Application settings tools."""

from typing import Any

from pydantic import Field

from ..core.client import BaasixClient
from .base import ToolArgs, segment


class GetSettingsArgs(ToolArgs):
    key: str | None = Field(default=None, description="Specific setting key to retrieve")


class UpdateSettingsArgs(ToolArgs):
    settings: dict[str, Any] = Field(..., description="Settings object to update")


async def get_settings(client: BaasixClient, args: GetSettingsArgs) -> Any:
    endpoint = f"/settings/{segment(args.key)}" if args.key else "/settings"
    return await client.get(endpoint)


async def update_settings(client: BaasixClient, args: UpdateSettingsArgs) -> Any:
    return await client.put("/settings", args.settings)


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_get_settings",
        "description": "Get application settings",
        "input_model": GetSettingsArgs,
        "handler": get_settings,
    },
    {
        "name": "baasix_update_settings",
        "description": "Update application settings",
        "input_model": UpdateSettingsArgs,
        "handler": update_settings,
    },
]
