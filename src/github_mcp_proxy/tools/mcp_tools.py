"""MCP tools for the proxied GitHub functions.

Registers each function of the registry as a FastMCP tool. Tools delegate to
the dispatcher so MCP clients and HTTP clients get identical behavior.
"""

import logging
from typing import Any

from .. import mcp
from ..config.defaults import DEFAULT_BRANCH, DEFAULT_PAGE, DEFAULT_PER_PAGE
from ..dispatcher import get_dispatcher
from ..utils.errors import GitHubAPIError
from ..utils.types import Failure, FunctionName

logger = logging.getLogger(__name__)


async def _invoke(name: FunctionName, parameters: dict[str, Any]) -> Any:
    result = await get_dispatcher().dispatch(name.value, parameters)
    if isinstance(result, Failure):
        raise GitHubAPIError(code=result.kind.name, message=result.message)
    return result.data


@mcp.tool(name=FunctionName.SEARCH_CODE.value)
async def search_code_tool(
    q: str,
    page: int = DEFAULT_PAGE,
    per_page: int = DEFAULT_PER_PAGE,
) -> dict[str, Any]:
    """Search for code across GitHub repositories.

    q uses GitHub code search syntax (e.g. "useState repo:facebook/react").

    Returns: {total_count, incomplete_results, items}
    """
    return await _invoke(
        FunctionName.SEARCH_CODE, {"q": q, "page": page, "per_page": per_page}
    )


@mcp.tool(name=FunctionName.GET_FILE_CONTENTS.value)
async def get_file_contents_tool(
    owner: str,
    repo: str,
    path: str,
    branch: str = DEFAULT_BRANCH,
) -> dict[str, Any]:
    """Get the contents of a file from a GitHub repository.

    Returns: {content, path, repo} with content decoded to text
    """
    return await _invoke(
        FunctionName.GET_FILE_CONTENTS,
        {"owner": owner, "repo": repo, "path": path, "branch": branch},
    )


@mcp.tool(name=FunctionName.SEARCH_REPOSITORIES.value)
async def search_repositories_tool(
    q: str,
    page: int = DEFAULT_PAGE,
    per_page: int = DEFAULT_PER_PAGE,
) -> dict[str, Any]:
    """Search for GitHub repositories.

    q uses GitHub repository search syntax (e.g. "tetris language:python").

    Returns: {total_count, incomplete_results, items}
    """
    return await _invoke(
        FunctionName.SEARCH_REPOSITORIES, {"q": q, "page": page, "per_page": per_page}
    )


logger.info("MCP tools registered: search_code, get_file_contents, search_repositories")
