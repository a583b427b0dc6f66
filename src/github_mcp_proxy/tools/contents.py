"""GitHub repository contents handler.

Fetches a single file through the contents API and returns its decoded text.
"""

import base64
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..utils.errors import handle_github_error
from ..utils.github_client import get_github_client
from ..utils.types import (
    Failure,
    FileContentsParams,
    FileContentsResponse,
    FunctionResult,
    Success,
)

logger = logging.getLogger(__name__)


def decode_content(encoded: str) -> str:
    """Decode the base64 ``content`` field of a contents API response.

    GitHub wraps the payload every 60 characters; the line breaks are not
    part of the base64 alphabet and are dropped before decoding.
    """
    raw = base64.b64decode("".join(encoded.split()))
    return raw.decode("utf-8", errors="replace")


async def get_file_contents(parameters: Mapping[str, Any]) -> FunctionResult:
    """Get the decoded contents of one file.

    Parameters: owner, repo, path (required), branch (default "main").

    Returns: {content, path, repo} with repo in "owner/repo" form.

    A path naming a directory makes GitHub answer with a list; that shape
    is not handled here and surfaces to the dispatcher as an error.
    """
    params = FileContentsParams.from_mapping(parameters)
    endpoint = f"/repos/{params.owner}/{params.repo}/contents/{params.path}"

    try:
        gh = get_github_client()
        data = await gh.get_json(endpoint, params={"ref": params.branch})
    except httpx.HTTPError as e:
        error = handle_github_error(e)
        logger.warning(f"GET {endpoint} failed [{error.code}]: {error.message}")
        return Failure(error.message)

    content = decode_content(data["content"])
    logger.info(f"Fetched {params.full_name}:{params.path}@{params.branch} ({len(content)} chars)")

    response: FileContentsResponse = {
        "content": content,
        "path": params.path,
        "repo": params.full_name,
    }
    return Success(response)
