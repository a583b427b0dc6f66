"""Pytest configuration and fixtures for integration tests.

Integration tests call the real GitHub API through the shared client.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv

from github_mcp_proxy.dispatcher import Dispatcher, get_dispatcher
from github_mcp_proxy.utils.github_client import close_github_client

# Load test environment variables
TEST_ENV_FILE = Path(__file__).parent.parent.parent / ".env.test"
if TEST_ENV_FILE.exists():
    load_dotenv(TEST_ENV_FILE)
else:
    # Fall back to regular .env for local development
    load_dotenv()


@pytest.fixture(scope="session")
def test_config() -> dict:
    """Provide test configuration from environment variables.

    Returns:
        Dictionary with the token and the public file used by content tests.

    Raises:
        pytest.skip: If GITHUB_TOKEN is not set (skips integration tests).
    """
    token = os.getenv("GITHUB_TOKEN")
    if not token:
        pytest.skip("GITHUB_TOKEN not set - skipping integration tests")

    return {
        "token": token,
        "owner": os.getenv("TEST_OWNER", "octocat"),
        "repo": os.getenv("TEST_REPO", "Hello-World"),
        "path": os.getenv("TEST_PATH", "README"),
        "branch": os.getenv("TEST_BRANCH", "master"),
    }


@pytest_asyncio.fixture
async def dispatcher(test_config: dict) -> AsyncGenerator[Dispatcher, None]:
    """Provide the shared dispatcher and close the GitHub client afterwards.

    The client's connection pool is bound to the test's event loop, so it is
    closed when the test finishes.
    """
    yield get_dispatcher()
    await close_github_client()
