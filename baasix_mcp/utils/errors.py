"""Error types for the Baasix MCP server."""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class BaasixMCPError(Exception):
    """Base exception for Baasix MCP server errors."""

    pass


class ConfigurationError(BaasixMCPError):
    """Raised when configuration is missing or invalid.

    Fatal at startup: the server does not start.
    """

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("Configuration validation failed:\n" + "\n".join(errors))
        self.errors = errors


class AuthenticationError(BaasixMCPError):
    """Raised when no credential is usable or the login exchange fails."""

    pass


class ApiError(BaasixMCPError):
    """Raised when the Baasix backend returns a non-success status."""

    def __init__(self, status_code: int | None, message: str):
        super().__init__(f"Baasix API Error: {message}")
        self.status_code = status_code
        self.message = message


# Protocol errors never reach the backend
class ProtocolError(BaasixMCPError):
    """Raised when an invocation is malformed at the protocol level."""

    code: int = INVALID_PARAMS

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message


class UnknownToolError(ProtocolError):
    """Raised when an invocation names a tool that is not registered."""

    code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvalidArgumentsError(ProtocolError):
    """Raised when invocation arguments fail schema validation."""

    code = INVALID_PARAMS

    def __init__(self, tool_name: str, details: list[str]):
        super().__init__(f"Invalid arguments for {tool_name}: " + "; ".join(details))
        self.tool_name = tool_name
        self.details = details


class InternalError(BaasixMCPError):
    """Catch-all for failures raised while a tool handler runs."""

    code = INTERNAL_ERROR

    def __init__(self, tool_name: str, cause: BaseException):
        super().__init__(f"Tool execution failed: {cause}")
        self.tool_name = tool_name
        self.cause = cause
