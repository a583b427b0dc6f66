"""Tests for proxy setup and infrastructure.

Tests the GitHub client (headers, singleton, query handling) and the
startup check that keeps the registry and the MCP tool list in sync.
"""

import os
from unittest.mock import MagicMock, patch

import httpx
import pytest

from github_mcp_proxy.utils.github_client import (
    GitHubClient,
    build_headers,
    close_github_client,
    get_github_client,
    reset_github_client,
)


class TestHeaders:
    """Test the headers sent with every upstream request."""

    def test_headers_with_token(self) -> None:
        """Token is sent with the 'token' scheme."""
        headers = build_headers("abc123")

        assert headers["Authorization"] == "token abc123"
        assert headers["Accept"] == "application/vnd.github.v3+json"

    def test_headers_without_token_keep_empty_authorization(self) -> None:
        """Without a token the Authorization header is present but empty."""
        assert build_headers(None)["Authorization"] == ""
        assert build_headers("")["Authorization"] == ""


class TestGitHubClient:
    """Test GitHub client requests against a mock transport."""

    @pytest.mark.asyncio
    async def test_get_json_sends_headers_and_params(self) -> None:
        """GET carries auth/accept headers and the query parameters."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        client = GitHubClient(
            token="test_token",
            base_url="https://api.github.test/",
            transport=httpx.MockTransport(handler),
        )
        data = await client.get_json("/search/code", params={"q": "x", "page": 2})
        await client.aclose()

        assert data == {"ok": True}
        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "api.github.test"
        assert request.url.path == "/search/code"
        assert request.url.params["q"] == "x"
        assert request.url.params["page"] == "2"
        assert request.headers["Authorization"] == "token test_token"

    @pytest.mark.asyncio
    async def test_get_json_sends_empty_authorization_without_token(self) -> None:
        """An unauthenticated client still sends the Authorization header."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = GitHubClient(token=None, transport=httpx.MockTransport(handler))
        await client.get_json("/search/repositories")

        assert "authorization" in seen[0].headers
        assert seen[0].headers["authorization"] == ""
        assert client.authenticated is False

    @pytest.mark.asyncio
    async def test_get_json_drops_none_params(self) -> None:
        """Parameters without a value are omitted from the query string."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = GitHubClient(token="t", transport=httpx.MockTransport(handler))
        await client.get_json("/search/code", params={"q": None, "page": 1})

        assert "q" not in seen[0].url.params
        assert seen[0].url.params["page"] == "1"

    @pytest.mark.asyncio
    async def test_get_json_raises_on_error_status(self) -> None:
        """4xx responses raise httpx.HTTPStatusError."""
        client = GitHubClient(
            token="t",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(404, json={"message": "Not Found"})
            ),
        )

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.get_json("/repos/nobody/nothing/contents/README.md")

        assert exc_info.value.response.status_code == 404

    @pytest.mark.asyncio
    async def test_aclose_is_idempotent(self) -> None:
        """Closing twice, or before any request, is harmless."""
        client = GitHubClient(token="t")
        await client.aclose()
        await client.aclose()


class TestGitHubClientSingleton:
    """Test GitHub client singleton functionality."""

    def setup_method(self) -> None:
        """Reset singleton before each test."""
        reset_github_client()

    def teardown_method(self) -> None:
        """Reset singleton after each test."""
        reset_github_client()

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    def test_get_github_client_reads_token(self) -> None:
        """Client built from GITHUB_TOKEN is authenticated."""
        client = get_github_client()

        assert client.authenticated is True

    @patch.dict(os.environ, {}, clear=True)
    def test_get_github_client_no_token(self) -> None:
        """Missing token does not fail, the client is unauthenticated."""
        client = get_github_client()

        assert client.authenticated is False

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    def test_get_github_client_singleton(self) -> None:
        """Test that get_github_client returns the same instance."""
        client1 = get_github_client()
        client2 = get_github_client()

        assert client1 is client2

    @patch.dict(os.environ, {"GITHUB_TOKEN": "test_token"})
    def test_reset_creates_new_instance(self) -> None:
        """After reset a fresh client is built."""
        client1 = get_github_client()
        reset_github_client()
        client2 = get_github_client()

        assert client1 is not client2

    @pytest.mark.asyncio
    async def test_close_github_client_drops_instance(self) -> None:
        """Closing the shared client makes the next call build a new one."""
        client1 = get_github_client()
        await close_github_client()

        assert get_github_client() is not client1


class TestVerifyTools:
    """Test the startup consistency check between registry and MCP tools."""

    def test_verify_tools_lists_all_functions(self) -> None:
        """Registry and MCP tools name the same three functions."""
        from github_mcp_proxy.server import verify_tools

        names = verify_tools()

        assert names == ["search_code", "get_file_contents", "search_repositories"]

    def test_verify_tools_detects_drift(self) -> None:
        """An extra MCP tool without a registry entry is a startup error."""
        from github_mcp_proxy import server

        extra = MagicMock()
        extra.name = "delete_repo"
        real_tools = server.mcp._tool_manager.list_tools()

        with patch.object(server.mcp._tool_manager, "list_tools", return_value=[*real_tools, extra]):
            with pytest.raises(RuntimeError) as exc_info:
                server.verify_tools()

        assert "out of sync" in str(exc_info.value)
