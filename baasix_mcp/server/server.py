"""MCP server exposing the Baasix tool catalog over stdio."""

import logging

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from .. import SERVER_NAME, __version__
from ..core.auth import AuthManager
from ..core.client import BaasixClient
from ..core.config import Credentials, Settings
from .dispatcher import Dispatcher
from .registry import ToolRegistry, create_default_registry

logger = logging.getLogger(__name__)


class BaasixMCPServer:
    """
    MCP server wiring the tool registry and dispatcher to the protocol.

    Failed invocations become JSON-RPC errors carrying the dispatcher's
    error code, so clients can tell unknown tools and bad arguments apart
    from backend failures.
    """

    def __init__(self, registry: ToolRegistry, client: BaasixClient):
        """
        Initialize the server.

        Args:
            registry: Tool catalog to advertise and dispatch against
            client: Baasix client shared by every tool invocation
        """
        self.app = Server(SERVER_NAME, version=__version__)
        self.registry = registry
        self.client = client
        self.dispatcher = Dispatcher(registry, client)
        self.setup_handlers()

    async def handle_list_tools(self) -> list[types.Tool]:
        logger.info("Listing available tools")
        return [descriptor.to_tool() for descriptor in self.registry.list_descriptors()]

    async def handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        """
        Handle a ``tools/call`` request.

        Raises:
            McpError: If the invocation failed, with the failure's error code
        """
        result = await self.dispatcher.dispatch(request.params.name, request.params.arguments)
        if not result.ok:
            raise McpError(types.ErrorData(code=result.error_code, message=result.error_message))

        return types.ServerResult(types.CallToolResult(content=result.content))

    def setup_handlers(self) -> None:
        """Set up MCP handlers for tool listing and calling."""

        @self.app.list_tools()
        async def list_tools() -> list[types.Tool]:
            return await self.handle_list_tools()

        # Registered directly rather than through ``call_tool()``, which would
        # turn every failure into an ``isError`` result instead of a protocol error.
        self.app.request_handlers[types.CallToolRequest] = self.handle_call_tool

    async def run(self) -> None:
        """Run the MCP server."""
        logger.info(f"Starting MCP Server: {self.app.name} v{__version__}")
        logger.info(f"Baasix URL: {self.client.base_url}")
        logger.info(f"Authentication: {self.client.auth.mode.value}")

        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP server running on stdio")
            await self.app.run(
                read_stream,
                write_stream,
                self.app.create_initialization_options(),
            )


def create_server(settings: Settings) -> BaasixMCPServer:
    """
    Build a server from validated settings.

    Raises:
        ConfigurationError: If the settings are incomplete or inconsistent
    """
    credentials = Credentials.from_settings(settings)
    client = BaasixClient(AuthManager(credentials))
    return BaasixMCPServer(create_default_registry(), client)
