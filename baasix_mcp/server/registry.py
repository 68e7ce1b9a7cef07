"""Tool registry: the authoritative catalog of Baasix tools.

Every tool pairs a pydantic argument model with an async handler.  The JSON
schema advertised to MCP clients is generated from the same model that
validates incoming arguments.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from mcp.types import Tool
from pydantic import BaseModel

from ..core.client import BaasixClient
from ..tools import ALL_TOOL_SCHEMAS

logger = logging.getLogger(__name__)

ToolHandler = Callable[[BaasixClient, Any], Awaitable[Any]]


def _clean_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Strip pydantic-only noise so schemas read like hand-written ones.

    Drops generated titles and ``default: null``, and collapses
    ``anyOf: [X, {type: null}]`` for optional fields into ``X``.
    """
    any_of = schema.get("anyOf")
    if any_of:
        non_null = [option for option in any_of if option.get("type") != "null"]
        if len(non_null) == 1 and len(non_null) < len(any_of):
            del schema["anyOf"]
            for key, value in non_null[0].items():
                schema.setdefault(key, value)

    schema.pop("title", None)
    if "default" in schema and schema["default"] is None:
        del schema["default"]

    for prop in schema.get("properties", {}).values():
        _clean_schema(prop)
    for definition in schema.get("$defs", {}).values():
        _clean_schema(definition)
    if isinstance(schema.get("items"), dict):
        _clean_schema(schema["items"])
    for key in ("anyOf", "allOf", "oneOf"):
        for option in schema.get(key, []):
            _clean_schema(option)
    return schema


def build_input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """Generate the advertised JSON schema for an argument model."""
    schema = _clean_schema(model.model_json_schema(by_alias=True))
    schema.setdefault("type", "object")
    schema.setdefault("properties", {})
    return schema


@dataclass(frozen=True)
class ToolDescriptor:
    """A registered tool. Immutable once registered."""

    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler = field(repr=False, compare=False)

    @cached_property
    def input_schema(self) -> dict[str, Any]:
        return build_input_schema(self.input_model)

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


class ToolRegistry:
    """
    Ordered mapping from tool name to descriptor.

    Registration order is preserved and is the order tools are advertised in.
    """

    def __init__(self):
        self._tools: dict[str, ToolDescriptor] = {}

    def register_tool(
        self,
        name: str,
        description: str,
        input_model: type[BaseModel],
        handler: ToolHandler,
    ) -> ToolDescriptor:
        """
        Register a tool.

        Args:
            name: Unique tool name
            description: Tool description shown to clients
            input_model: Pydantic model validating the tool arguments
            handler: Async function called with (client, validated_args)

        Returns:
            The registered descriptor

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")

        descriptor = ToolDescriptor(
            name=name, description=description, input_model=input_model, handler=handler
        )
        self._tools[name] = descriptor
        logger.debug(f"Registered tool: {name}")
        return descriptor

    def register_all(self, tool_schemas: Iterable[dict[str, Any]]) -> None:
        """Register every entry of a ``TOOL_SCHEMAS``-style list."""
        for schema in tool_schemas:
            self.register_tool(
                name=schema["name"],
                description=schema["description"],
                input_model=schema["input_model"],
                handler=schema["handler"],
            )

    def list_descriptors(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    def lookup(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def create_default_registry() -> ToolRegistry:
    """Build the registry holding the full Baasix tool catalog."""
    registry = ToolRegistry()
    registry.register_all(ALL_TOOL_SCHEMAS)
    logger.info(f"Registered {len(registry)} Baasix tools")
    return registry
