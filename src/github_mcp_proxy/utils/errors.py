"""Structured error handling for upstream GitHub calls.

Provides custom error classes and utilities for classifying httpx failures
with actionable troubleshooting suggestions. The message of every structured
error is the underlying error's own text, which is what callers receive.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class RegistryError(ValueError):
    """Raised when the function registry is misconfigured."""


@dataclass
class GitHubAPIError(Exception):
    """
    Custom error class for GitHub API errors with structured information.

    Attributes:
        code: Error code for categorization (e.g., "RESOURCE_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error details
        suggestions: Optional troubleshooting suggestions

    Example:
        >>> error = GitHubAPIError(
        ...     code="RESOURCE_NOT_FOUND",
        ...     message="Client error '404 Not Found' for url '...'",
        ...     details={"status": 404},
        ...     suggestions=["Verify the owner, repository and path"]
        ... )
        >>> error.to_dict()
        {'error': True, 'code': 'RESOURCE_NOT_FOUND', ...}
    """

    code: str
    message: str
    details: dict[str, Any] | None = None
    suggestions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Initialize the exception base class."""
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert error to dictionary for structured responses.

        Returns:
            Dictionary with error information including code, message, details, and suggestions
        """
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }


def error_message(error: BaseException) -> str:
    """
    Return the message text of an error.

    httpx appends a documentation link on a second line of status errors;
    only the first line is kept. Errors without text (some timeouts) fall
    back to the exception class name.
    """
    text = str(error).strip()
    if not text:
        return type(error).__name__
    return text.splitlines()[0]


def _upstream_message(response: httpx.Response) -> str | None:
    """Extract GitHub's own "message" field from an error response, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get("message")
        return message if isinstance(message, str) else None
    return None


def handle_github_error(error: Exception) -> GitHubAPIError:
    """
    Classify an upstream failure into a structured GitHubAPIError.

    Status errors are classified by HTTP status, transport errors (DNS,
    connect, timeout) by type. The structured message is always the
    original error text; GitHub's own response message, the status and
    the error class are kept in ``details`` for logging only.

    Args:
        error: Exception raised while calling GitHub (typically httpx.HTTPError)

    Returns:
        GitHubAPIError with code, details and suggestions

    Example:
        >>> try:
        ...     await client.get_json("/repos/nobody/nothing")
        ... except httpx.HTTPError as e:
        ...     structured_error = handle_github_error(e)
        ...     print(structured_error.to_dict())
    """
    message = error_message(error)

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        status = response.status_code
        details: dict[str, Any] = {"status": status}
        upstream = _upstream_message(response)
        if upstream:
            details["upstream_message"] = upstream

        if status == 404:
            return GitHubAPIError(
                code="RESOURCE_NOT_FOUND",
                message=message,
                details=details,
                suggestions=[
                    "Verify the owner, repository and path exist",
                    "Check the branch name (defaults to 'main')",
                    "Check you have access to this repository",
                ],
            )

        if status == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            details["rate_limit_reset"] = response.headers.get("X-RateLimit-Reset")
            return GitHubAPIError(
                code="RATE_LIMITED",
                message=message,
                details=details,
                suggestions=[
                    "Wait for the rate limit window to reset",
                    "Set GITHUB_TOKEN to get a higher rate limit",
                ],
            )

        if status == 403:
            return GitHubAPIError(
                code="FORBIDDEN",
                message=message,
                details=details,
                suggestions=[
                    "Verify GITHUB_TOKEN has required scopes",
                    "Check repository access permissions",
                ],
            )

        if status == 401:
            return GitHubAPIError(
                code="UNAUTHORIZED",
                message=message,
                details=details,
                suggestions=["Verify GITHUB_TOKEN is valid", "Token may have expired"],
            )

        if status == 422:
            return GitHubAPIError(
                code="VALIDATION_FAILED",
                message=message,
                details=details,
                suggestions=[
                    "Review the parameter values in your request",
                    "Search functions require a non-empty 'q' parameter",
                ],
            )

        return GitHubAPIError(code="GITHUB_API_ERROR", message=message, details=details)

    if isinstance(error, httpx.TransportError):
        return GitHubAPIError(
            code="NETWORK_ERROR",
            message=message,
            details={"original_error": type(error).__name__},
            suggestions=[
                "Check network connectivity to the GitHub API",
                "Verify GITHUB_API_URL if a custom endpoint is configured",
            ],
        )

    return GitHubAPIError(
        code="GITHUB_API_ERROR",
        message=message,
        details={"original_error": type(error).__name__},
    )
