"""GitHub MCP Proxy Package.

Exposes a small set of GitHub functions over HTTP and as MCP tools via FastMCP.
"""

from mcp.server.fastmcp import FastMCP

# Create single global MCP server instance
# This MUST be at package level to avoid double-instantiation when module is run as __main__
mcp = FastMCP("github-mcp-proxy")

__all__ = ["mcp"]
