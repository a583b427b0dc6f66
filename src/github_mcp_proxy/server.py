"""GitHub MCP Proxy - Main entry point.

Serves the function registry over HTTP (default) or as FastMCP tools over stdio.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Import the singleton mcp instance from package level
from . import mcp

__all__ = ["mcp", "main"]

# Load environment variables from project root .env file
# This file is at: <root>/src/github_mcp_proxy/server.py
# Project root is 3 levels up
project_root = Path(__file__).parent.parent.parent
env_path = project_root / ".env"
load_dotenv(env_path)

# Imported after load_dotenv: config/defaults.py reads the environment at import time
from .api import create_app  # noqa: E402
from .config.defaults import GITHUB_TOKEN_ENV, HOST, LOG_LEVEL, PORT  # noqa: E402
from .dispatcher import get_dispatcher  # noqa: E402

# Configure logging to stderr (stdout is used for MCP protocol)
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

if not os.getenv(GITHUB_TOKEN_ENV):
    logger.warning(f"{GITHUB_TOKEN_ENV} not set, GitHub requests will be unauthenticated")
else:
    logger.info(f"{GITHUB_TOKEN_ENV} loaded")

# Tools are registered via @mcp.tool() decorators in the module
try:
    from .tools import mcp_tools  # noqa: F401, E402

    logger.info("MCP tool module loaded successfully")
except ImportError as e:
    logger.error(f"Failed to import tool modules: {e}")
    raise


def verify_tools() -> list[str]:
    """
    Check that the registry and the MCP tool list name the same functions.

    Returns:
        Registered function names in registry order

    Raises:
        RuntimeError: If the two sets differ
    """
    registry_names = get_dispatcher().registry.names()
    tool_names = [t.name for t in mcp._tool_manager.list_tools()]

    if sorted(registry_names) != sorted(tool_names):
        raise RuntimeError(
            f"Registry {registry_names} and MCP tools {tool_names} are out of sync"
        )

    logger.info(f"✅ {len(registry_names)} functions registered: {', '.join(registry_names)}")
    return registry_names


def main() -> None:
    """
    Run the proxy.

    --transport http (default) serves the HTTP API with uvicorn on HOST:PORT.
    --transport stdio runs the FastMCP server on stdio for MCP clients.
    """
    parser = argparse.ArgumentParser(description="GitHub MCP Proxy")
    parser.add_argument(
        "--transport",
        choices=["http", "stdio"],
        default="http",
        help="http | stdio",
    )
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args()

    verify_tools()

    try:
        if args.transport == "stdio":
            logger.info("Listening on stdio for MCP protocol messages")
            mcp.run()
        else:
            logger.info(f"Server running on {args.host}:{args.port}")
            uvicorn.run(create_app(), host=args.host, port=args.port, log_level=LOG_LEVEL.lower())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")


if __name__ == "__main__":
    main()
