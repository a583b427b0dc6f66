"""GitHub client utilities."""

import logging
import os
from typing import Any

import httpx

from ..config.defaults import GITHUB_ACCEPT, GITHUB_API_URL, GITHUB_TOKEN_ENV

logger = logging.getLogger(__name__)

_github_instance: "GitHubClient | None" = None


def build_headers(token: str | None) -> dict[str, str]:
    """Headers sent with every upstream request.

    The Authorization header is always present; without a token its
    value is empty.
    """
    return {
        "Accept": GITHUB_ACCEPT,
        "Authorization": f"token {token}" if token else "",
    }


class GitHubClient:
    """Async GitHub REST client sharing one httpx connection pool."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = GITHUB_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._headers = build_headers(token)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def authenticated(self) -> bool:
        return bool(self._headers["Authorization"])

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Perform a GET request and return parsed JSON.

        Raises:
            httpx.HTTPStatusError: On a 4xx/5xx response
            httpx.TransportError: On DNS, connection or timeout failures
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self._get_client().get(path, params=query)
        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def get_github_client() -> GitHubClient:
    """Get the shared GitHub client (singleton)."""
    global _github_instance

    if _github_instance is None:
        token = os.getenv(GITHUB_TOKEN_ENV)
        if not token:
            logger.warning(
                f"{GITHUB_TOKEN_ENV} not set, sending unauthenticated requests "
                "(lower rate limits, public data only)"
            )
        _github_instance = GitHubClient(token=token)
        logger.info(f"GitHub client created for {_github_instance.base_url}")

    return _github_instance


async def close_github_client() -> None:
    """Close the shared client's connection pool and drop it."""
    global _github_instance
    if _github_instance is not None:
        await _github_instance.aclose()
    _github_instance = None


def reset_github_client() -> None:
    """Reset GitHub client singleton (for testing)."""
    global _github_instance
    _github_instance = None
