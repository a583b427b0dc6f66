"""GitHub MCP proxy utilities."""

from .errors import GitHubAPIError, RegistryError, handle_github_error
from .github_client import GitHubClient, get_github_client, reset_github_client

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "RegistryError",
    "handle_github_error",
    "get_github_client",
    "reset_github_client",
]
