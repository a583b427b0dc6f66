"""Root pytest configuration for github-mcp-proxy tests.

Resets the process-wide singletons between tests and provides a fixture that
routes upstream GitHub calls to an in-process httpx mock transport.
"""

from collections.abc import Callable, Generator

import httpx
import pytest

from github_mcp_proxy.dispatcher import reset_dispatcher
from github_mcp_proxy.utils.github_client import GitHubClient, reset_github_client

TEST_API_URL = "https://api.github.test"

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Drop the shared dispatcher and GitHub client around every test."""
    reset_dispatcher()
    reset_github_client()
    yield
    reset_dispatcher()
    reset_github_client()


@pytest.fixture
def mock_upstream(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[UpstreamHandler], list[httpx.Request]]:
    """Install a fake GitHub API.

    Returns a function taking a request handler; it patches the client used by
    every handler module and returns the list the sent requests are recorded in.
    """

    def install(handler: UpstreamHandler) -> list[httpx.Request]:
        requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = GitHubClient(
            token="test_token",
            base_url=TEST_API_URL,
            transport=httpx.MockTransport(record),
        )
        monkeypatch.setattr("github_mcp_proxy.tools.search.get_github_client", lambda: client)
        monkeypatch.setattr("github_mcp_proxy.tools.contents.get_github_client", lambda: client)
        return requests

    return install
