"""Book Lending MCP server.

Exposes the lending operations as MCP tools over stdio or Streamable HTTP.
The server is a thin surface: every tool calls one lending operation and
renders its result.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from book_lending.config import LendingConfig, get_config
from book_lending.observability import initialize_observability
from book_lending.tools import all_tools

logger = logging.getLogger(__name__)


def create_server(config: LendingConfig) -> FastMCP:
    """Build a FastMCP server with every lending tool registered."""
    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "Book Lending server. Add books, list the catalog, and check books "
            "out and back in. Checkout and return fail when the book is missing "
            "or already in the requested state."
        ),
    )

    for tool in all_tools:
        logger.debug("Registering tool: %s", tool["name"])
        try:
            mcp.tool(
                name=tool["name"],
                description=tool["description"],
            )(tool["handler"])
        except Exception:
            logger.exception("Failed to register tool %s", tool["name"])
            raise

    logger.info("Registered %d tools", len(all_tools))
    return mcp


def run_server(mcp: FastMCP, config: LendingConfig) -> None:
    """Run the server on the configured transport."""
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting %s v%s on %s transport", config.server_name, config.server_version, config.transport)
    if config.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)


def main() -> None:
    """Entry point for ``book-lending-mcp``."""
    config = get_config()
    initialize_observability(config)

    try:
        logger.info("Book Lending MCP Server v%s (table %s)", config.server_version, config.table_name)
        run_server(create_server(config), config)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
