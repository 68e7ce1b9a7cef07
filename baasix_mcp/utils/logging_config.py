"""Process-wide logging for the Baasix MCP server.

stdout carries the MCP stdio stream, so log records only ever go to stderr
and, when ``LOG_FILE`` is set, to that file.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# httpx logs every request at INFO; one line per Baasix call drowns the tool log
CHATTY_LOGGERS = ("httpx", "httpcore")


def setup_logging(settings: "Settings | None" = None) -> None:
    """Configure root logging from the server settings.

    Args:
        settings: Loaded settings. Without them (configuration failed to
            load) INFO records go to stderr only, so the failure can still
            be reported.
    """
    level = settings.log_level if settings else "INFO"
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if settings and settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    library_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
