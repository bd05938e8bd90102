"""
Stdio entry point for the Veo MCP server.

Validates configuration, configures logging to stderr, and serves the
tools over the MCP stdio transport. A missing GEMINI_API_KEY is the only
fatal startup condition.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from dotenv import load_dotenv
from mcp.server.stdio import stdio_server

# Load environment variables first
load_dotenv()

from veo_mcp.agent.server import veo_tools_server  # noqa: E402
from veo_mcp.core.config import get_settings  # noqa: E402
from veo_mcp.core.logging import configure_logging  # noqa: E402
from veo_mcp.models.errors import ConfigurationError  # noqa: E402

logger = logging.getLogger(__name__)


async def serve() -> None:
    """Run the MCP server over stdin/stdout until the client disconnects."""
    server = veo_tools_server["instance"]
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Veo MCP server running via stdio")
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


def main() -> None:
    """Console-script entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.gemini_api_key)

    try:
        settings.require_api_key()
    except ConfigurationError as e:
        logger.error(f"{e}. Set it in your environment before running this server.")
        sys.exit(1)

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Shutdown requested")


if __name__ == "__main__":
    main()
