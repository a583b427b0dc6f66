"""Common type definitions using TypedDict, enums and dataclasses.

Provides the result union returned by every function handler, the error
taxonomy used by the HTTP transport, and the typed parameter structs each
handler builds from its raw parameter mapping.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypedDict

from ..config.defaults import DEFAULT_BRANCH, DEFAULT_PAGE, DEFAULT_PER_PAGE


class FunctionName(str, Enum):
    """The fixed set of functions exposed by the proxy."""

    SEARCH_CODE = "search_code"
    GET_FILE_CONTENTS = "get_file_contents"
    SEARCH_REPOSITORIES = "search_repositories"


class ErrorKind(str, Enum):
    """
    Failure categories surfaced to callers.

    Only the transport looks at the kind; the envelope itself carries
    the message text alone.
    """

    UNKNOWN_FUNCTION = "unknown_function"
    UPSTREAM_FAILURE = "upstream_failure"
    INTERNAL_ERROR = "internal_error"

    @property
    def http_status(self) -> int:
        """HTTP status the transport answers with for this kind."""
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.UNKNOWN_FUNCTION: 400,
    ErrorKind.UPSTREAM_FAILURE: 200,
    ErrorKind.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class Success:
    """
    Successful function result.

    Attributes:
        data: Upstream-specific JSON-like value
    """

    data: Any

    def to_envelope(self) -> dict[str, Any]:
        return {"status": "success", "data": self.data}


@dataclass(frozen=True)
class Failure:
    """
    Failed function result.

    Attributes:
        message: Human-readable error text returned to the caller
        kind: Failure category, decides the HTTP status
    """

    message: str
    kind: ErrorKind = ErrorKind.UPSTREAM_FAILURE

    def to_envelope(self) -> dict[str, Any]:
        return {"status": "error", "error": self.message}


FunctionResult = Success | Failure


@dataclass(frozen=True)
class FunctionCall:
    """
    A single incoming call.

    Attributes:
        name: Requested function name
        parameters: Raw parameter mapping, passed to the handler untouched
    """

    name: str
    parameters: Mapping[str, Any]


@dataclass(frozen=True)
class SearchParams:
    """Parameters shared by the code and repository search functions."""

    q: Any
    page: Any = DEFAULT_PAGE
    per_page: Any = DEFAULT_PER_PAGE

    @classmethod
    def from_mapping(cls, parameters: Mapping[str, Any]) -> "SearchParams":
        return cls(
            q=parameters.get("q"),
            page=parameters.get("page", DEFAULT_PAGE),
            per_page=parameters.get("per_page", DEFAULT_PER_PAGE),
        )

    def query(self) -> dict[str, Any]:
        """Query string parameters for the search endpoints."""
        return {"q": self.q, "page": self.page, "per_page": self.per_page}


@dataclass(frozen=True)
class FileContentsParams:
    """Parameters of the get_file_contents function."""

    owner: Any
    repo: Any
    path: Any
    branch: Any = DEFAULT_BRANCH

    @classmethod
    def from_mapping(cls, parameters: Mapping[str, Any]) -> "FileContentsParams":
        return cls(
            owner=parameters.get("owner"),
            repo=parameters.get("repo"),
            path=parameters.get("path"),
            branch=parameters.get("branch", DEFAULT_BRANCH),
        )

    @property
    def full_name(self) -> str:
        """
        Get full repository name in 'owner/repo' format.

        Returns:
            Full repository name
        """
        return f"{self.owner}/{self.repo}"


class FileContentsResponse(TypedDict):
    """
    Response format for get_file_contents.

    Attributes:
        content: Decoded file text
        path: File path as requested
        repo: Repository in 'owner/repo' format
    """

    content: str
    path: str
    repo: str
