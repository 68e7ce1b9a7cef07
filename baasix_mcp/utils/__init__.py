"""Utility functions and classes."""

from .errors import (
    ApiError,
    AuthenticationError,
    BaasixMCPError,
    ConfigurationError,
    InternalError,
    InvalidArgumentsError,
    ProtocolError,
    UnknownToolError,
)
from .logging_config import setup_logging

__all__ = [
    "BaasixMCPError",
    "ConfigurationError",
    "AuthenticationError",
    "ApiError",
    "ProtocolError",
    "UnknownToolError",
    "InvalidArgumentsError",
    "InternalError",
    "setup_logging",
]
