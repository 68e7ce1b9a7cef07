"""Notification tools."""

from typing import Any

from pydantic import Field

from ..core.client import BaasixClient
from .base import PageArgs, ToolArgs, query_params, segment


class ListNotificationsArgs(PageArgs):
    page: int = Field(default=1, description="Page number (default: 1)")
    limit: int = Field(default=10, description="Notifications per page (default: 10)")
    seen: bool | None = Field(default=None, description="Filter by seen status")


class SendNotificationArgs(ToolArgs):
    recipients: list[str] = Field(
        ..., description="Array of user IDs to send notification to"
    )
    title: str = Field(..., description="Notification title")
    message: str = Field(..., description="Notification message")
    type: str = Field(default="info", description="Notification type")


class NotificationArgs(ToolArgs):
    id: str = Field(..., description="Notification ID")


async def list_notifications(client: BaasixClient, args: ListNotificationsArgs) -> Any:
    seen = None if args.seen is None else str(args.seen).lower()
    params = query_params(page=args.page, limit=args.limit, seen=seen)
    return await client.get("/notifications", params=params)


async def send_notification(client: BaasixClient, args: SendNotificationArgs) -> Any:
    return await client.post("/notifications", args.payload())


async def mark_notification_seen(client: BaasixClient, args: NotificationArgs) -> Any:
    return await client.put(f"/notifications/{segment(args.id)}/seen")


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_list_notifications",
        "description": "List notifications for the authenticated user",
        "input_model": ListNotificationsArgs,
        "handler": list_notifications,
    },
    {
        "name": "baasix_send_notification",
        "description": "Send a notification to specified users",
        "input_model": SendNotificationArgs,
        "handler": send_notification,
    },
    {
        "name": "baasix_mark_notification_seen",
        "description": "Mark a notification as seen",
        "input_model": NotificationArgs,
        "handler": mark_notification_seen,
    },
]
