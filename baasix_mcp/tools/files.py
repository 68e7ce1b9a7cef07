"""File metadata tools."""

from typing import Any

from pydantic import Field

from ..core.client import BaasixClient
from .base import PageArgs, ToolArgs, query_params, segment


class ListFilesArgs(PageArgs):
    filter: dict[str, Any] | None = Field(default=None, description="Filter criteria")
    page: int = Field(default=1, description="Page number (default: 1)")
    limit: int = Field(default=10, description="Files per page (default: 10)")


class FileArgs(ToolArgs):
    id: str = Field(..., description="File ID")


async def list_files(client: BaasixClient, args: ListFilesArgs) -> Any:
    params = query_params(filter=args.filter, page=args.page, limit=args.limit)
    return await client.get("/files", params=params)


async def get_file_info(client: BaasixClient, args: FileArgs) -> Any:
    return await client.get(f"/files/{segment(args.id)}")


async def delete_file(client: BaasixClient, args: FileArgs) -> Any:
    return await client.delete(f"/files/{segment(args.id)}")


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_list_files",
        "description": "List files with metadata and optional filtering",
        "input_model": ListFilesArgs,
        "handler": list_files,
    },
    {
        "name": "baasix_get_file_info",
        "description": "Get detailed information about a specific file",
        "input_model": FileArgs,
        "handler": get_file_info,
    },
    {
        "name": "baasix_delete_file",
        "description": "Delete a file",
        "input_model": FileArgs,
        "handler": delete_file,
    },
]
