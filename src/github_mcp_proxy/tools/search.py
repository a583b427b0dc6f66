"""GitHub search handlers.

Code and repository search both issue a single GET against the search API
and hand the upstream body back unmodified, pagination fields included.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..utils.errors import handle_github_error
from ..utils.github_client import get_github_client
from ..utils.types import Failure, FunctionResult, SearchParams, Success

logger = logging.getLogger(__name__)


async def _search(endpoint: str, parameters: Mapping[str, Any]) -> FunctionResult:
    params = SearchParams.from_mapping(parameters)
    try:
        gh = get_github_client()
        data = await gh.get_json(endpoint, params=params.query())
    except httpx.HTTPError as e:
        error = handle_github_error(e)
        logger.warning(f"GET {endpoint} failed [{error.code}]: {error.message}")
        return Failure(error.message)

    if isinstance(data, dict):
        logger.info(
            f"GET {endpoint} q={params.q!r} page={params.page}: "
            f"{len(data.get('items') or [])} of {data.get('total_count')} results"
        )
    return Success(data)


async def search_code(parameters: Mapping[str, Any]) -> FunctionResult:
    """Search code across GitHub.

    Parameters: q (required), page (default 1), per_page (default 30).

    Returns: the upstream search body ({total_count, incomplete_results, items}).
    """
    return await _search("/search/code", parameters)


async def search_repositories(parameters: Mapping[str, Any]) -> FunctionResult:
    """Search GitHub repositories.

    Parameters: q (required), page (default 1), per_page (default 30).

    Returns: the upstream search body ({total_count, incomplete_results, items}).
    """
    return await _search("/search/repositories", parameters)
