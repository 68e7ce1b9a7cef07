"""Reporting and analytics tools."""

from typing import Any

from pydantic import Field

from ..core.client import BaasixClient
from .base import ToolArgs, query_params, segment


class DateRange(ToolArgs):
    start: str | None = None
    end: str | None = None


class GenerateReportArgs(ToolArgs):
    collection: str = Field(..., description="Collection name")
    group_by: str | None = Field(default=None, alias="groupBy", description="Field to group by")
    filter: dict[str, Any] | None = Field(default=None, description="Filter criteria")
    date_range: DateRange | None = Field(
        default=None, alias="dateRange", description="Date range filter"
    )


class CollectionStatsArgs(ToolArgs):
    collections: list[str] | None = Field(
        default=None, description="Specific collections to get stats for"
    )
    timeframe: str | None = Field(
        default=None, description='Timeframe for stats (e.g., "24h", "7d", "30d")'
    )


async def generate_report(client: BaasixClient, args: GenerateReportArgs) -> Any:
    params = query_params(
        groupBy=args.group_by or None,
        filter=args.filter,
        dateRange=args.date_range.payload() if args.date_range else None,
    )
    return await client.get(f"/reports/{segment(args.collection)}", params=params)


async def collection_stats(client: BaasixClient, args: CollectionStatsArgs) -> Any:
    params = query_params(collections=args.collections, timeframe=args.timeframe or None)
    return await client.get("/reports/stats", params=params)


TOOL_SCHEMAS: list[dict[str, Any]] = [
    {
        "name": "baasix_generate_report",
        "description": "Generate reports with grouping and aggregation for a collection",
        "input_model": GenerateReportArgs,
        "handler": generate_report,
    },
    {
        "name": "baasix_collection_stats",
        "description": "Get collection statistics and analytics",
        "input_model": CollectionStatsArgs,
        "handler": collection_stats,
    },
]
