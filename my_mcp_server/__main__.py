"""Command-line entry point: ``python -m my_mcp_server`` or ``my-mcp-server``."""

import asyncio
import logging
import sys

from .config import configure_logging, load_config, set_config
from .mcp_server import McpServer
from .primitives import load_all

logger = logging.getLogger("my_mcp_server")


def main() -> None:
    """Load config, register all primitives and serve until interrupted."""
    try:
        config = load_config()
    except ValueError as e:
        configure_logging()
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    configure_logging(config.log_level)
    set_config(config)

    valid, error = config.is_valid_for_mode()
    if not valid:
        logger.error("Invalid configuration: %s", error)
        sys.exit(1)

    load_all()

    try:
        asyncio.run(McpServer(config).serve())
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Server stopped with an error")
        sys.exit(1)


if __name__ == "__main__":
    main()
