"""Item (record) CRUD tools for Baasix collections."""

from typing import Any

from pydantic import Field

from ..core.client import BaasixClient
from .base import PageArgs, ToolArgs, query_params, segment


class ListItemsArgs(PageArgs):
    collection: str = Field(..., description="Collection name")
    filter: dict[str, Any] | None = Field(default=None, description="Filter criteria")
    sort: str | None = Field(
        default=None, description='Sort field and direction (e.g., "createdAt:desc")'
    )
    page: int = Field(default=1, description="Page number (default: 1)")
    limit: int = Field(default=10, description="Items per page (default: 10)")


class ItemArgs(ToolArgs):
    collection: str = Field(..., description="Collection name")
    id: str = Field(..., description="Item ID")


class CreateItemArgs(ToolArgs):
    collection: str = Field(..., description="Collection name")
    data: dict[str, Any] = Field(..., description="Item data")


class UpdateItemArgs(ItemArgs):
    data: dict[str, Any] = Field(..., description="Updated item data")


async def list_items(client: BaasixClient, args: ListItemsArgs) -> Any:
    params = query_params(
        filter=args.filter, sort=args.sort or None, page=args.page, limit=args.limit
    )
    return await client.get(f"/items/{segment(args.collection)}", params=params)


async def get_item(client: BaasixClient, args: ItemArgs) -> Any:
    return await client.get(f"/items/{segment(args.collection)}/{segment(args.id)}")


async def create_item(client: BaasixClient, args: CreateItemArgs) -> Any:
    return await client.post(f"/items/{segment(args.collection)}", args.data)


async def update_item(client: BaasixClient, args: UpdateItemArgs) -> Any:
    return await client.put(f"/items/{segment(args.collection)}/{segment(args.id)}", args.data)


async def delete_item(client: BaasixClient, args: ItemArgs) -> Any:
    return await client.delete(f"/items/{segment(args.collection)}/{segment(args.id)}")


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_list_items",
        "description": (
            "Query items from a collection with optional filtering, sorting, and pagination"
        ),
        "input_model": ListItemsArgs,
        "handler": list_items,
    },
    {
        "name": "baasix_get_item",
        "description": "Get a specific item by ID from a collection",
        "input_model": ItemArgs,
        "handler": get_item,
    },
    {
        "name": "baasix_create_item",
        "description": "Create a new item in a collection",
        "input_model": CreateItemArgs,
        "handler": create_item,
    },
    {
        "name": "baasix_update_item",
        "description": "Update an existing item in a collection",
        "input_model": UpdateItemArgs,
        "handler": update_item,
    },
    {
        "name": "baasix_delete_item",
        "description": "Delete an item from a collection",
        "input_model": ItemArgs,
        "handler": delete_item,
    },
]
