"""Shared building blocks for Baasix tool handlers."""

import json
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict


class ToolArgs(BaseModel):
    """Base class for tool argument models.

    Field aliases carry the wire names Baasix uses (``indexDefinition``,
    ``role_Id``, ...); handlers use the snake_case attributes.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def payload(self, *fields: str) -> dict[str, Any]:
        """Dump the given fields (all when empty) using wire names, dropping unset ones."""
        include = set(fields) if fields else None
        return self.model_dump(by_alias=True, exclude_none=True, include=include)


class NoArgs(ToolArgs):
    """Arguments for tools that take none."""

    model_config = ConfigDict(extra="forbid")


class PageArgs(ToolArgs):
    """Pagination arguments shared by the list tools."""

    page: int = 1
    limit: int = 10


def segment(value: str) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def query_params(**values: Any) -> dict[str, Any]:
    """Build a query string mapping.

    None values are dropped; dicts and lists are JSON-encoded the way
    Baasix expects ``filter``-style parameters.
    """
    params: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        params[key] = value
    return params
