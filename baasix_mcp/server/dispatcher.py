"""Tool invocation dispatcher.

Each invocation moves through Received -> Validated -> Executing and ends
as Succeeded or Failed.  ``dispatch`` never raises: every outcome is an
``InvocationResult``, which the MCP server translates into a protocol
response.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mcp.types import TextContent
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.client import BaasixClient
from ..utils.errors import (
    ApiError,
    AuthenticationError,
    InternalError,
    InvalidArgumentsError,
    ProtocolError,
    UnknownToolError,
)
from .registry import ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationResult:
    """Outcome of one tool invocation: content on success, error code and message on failure."""

    content: list[TextContent] = field(default_factory=list)
    error_code: int | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def success(cls, payload: Any) -> "InvocationResult":
        text = json.dumps(payload, indent=2, default=str)
        return cls(content=[TextContent(type="text", text=text)])

    @classmethod
    def failure(cls, error: ProtocolError | InternalError) -> "InvocationResult":
        return cls(error_code=error.code, error_message=str(error))


def _describe_validation_error(error: PydanticValidationError) -> list[str]:
    details = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        details.append(f"{location}: {err['msg']}" if location else err["msg"])
    return details


class Dispatcher:
    """Validates invocations against the registry and runs their handlers."""

    def __init__(self, registry: ToolRegistry, client: BaasixClient):
        """
        Initialize the dispatcher.

        Args:
            registry: Tool catalog to dispatch against
            client: Baasix client handed to every handler
        """
        self.registry = registry
        self.client = client

    def validate(self, descriptor: ToolDescriptor, arguments: Any) -> BaseModel:
        """
        Validate raw arguments against a tool's input model.

        Raises:
            InvalidArgumentsError: If the arguments do not match the schema
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentsError(descriptor.name, ["arguments must be an object"])

        try:
            return descriptor.input_model.model_validate(dict(arguments))
        except PydanticValidationError as e:
            raise InvalidArgumentsError(descriptor.name, _describe_validation_error(e)) from e

    async def dispatch(self, name: str, arguments: Any = None) -> InvocationResult:
        """
        Run one tool invocation.

        Args:
            name: Tool name
            arguments: Raw tool arguments

        Returns:
            Success with JSON text content, or failure with an MCP error code
        """
        logger.info(f"Calling tool: {name}")

        descriptor = self.registry.lookup(name)
        if descriptor is None:
            error = UnknownToolError(name)
            logger.warning(f"Rejected invocation: {error}")
            return InvocationResult.failure(error)

        try:
            args = self.validate(descriptor, arguments)
        except InvalidArgumentsError as e:
            logger.warning(f"Validation error in {name}: {e}")
            return InvocationResult.failure(e)

        try:
            payload = await descriptor.handler(self.client, args)
        except (AuthenticationError, ApiError) as e:
            logger.error(f"Error in tool {name}: {e}")
            return InvocationResult.failure(InternalError(name, e))
        except Exception as e:
            logger.exception(f"Error executing tool {name}: {e}")
            return InvocationResult.failure(InternalError(name, e))

        logger.debug(f"Tool {name} succeeded")
        return InvocationResult.success(payload)
