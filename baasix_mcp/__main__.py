"""Entry point for running the Baasix MCP server."""

import asyncio
import logging
import sys

from . import SERVER_NAME, __version__
from .core.config import load_settings
from .server import create_server
from .utils import ConfigurationError, setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Console script entry point. Returns the process exit code."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging()
        logger.error(str(e))
        return 1

    setup_logging(settings)
    logger.info(f"Starting {SERVER_NAME} v{__version__}")

    try:
        server = create_server(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
