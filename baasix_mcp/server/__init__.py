"""MCP server, tool registry and dispatcher."""

from .dispatcher import Dispatcher, InvocationResult
from .registry import ToolDescriptor, ToolRegistry, build_input_schema, create_default_registry
from .server import BaasixMCPServer, create_server

__all__ = [
    "BaasixMCPServer",
    "Dispatcher",
    "InvocationResult",
    "ToolDescriptor",
    "ToolRegistry",
    "build_input_schema",
    "create_default_registry",
    "create_server",
]
