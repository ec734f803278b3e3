"""Exception hierarchy and HTTP error classification.

All failures raised by github-tools derive from GitHubToolsError so the
tool registry can render them uniformly without catching unrelated bugs.
"""

import json
import logging

logger = logging.getLogger("github_tools.errors")

__all__ = [
    "ApiError",
    "ConfigurationError",
    "GitHubToolsError",
    "TransportError",
    "classify_error",
]


class GitHubToolsError(Exception):
    """Base class for every failure surfaced by github-tools."""

    pass


class ConfigurationError(GitHubToolsError):
    """Raised at construction when the client cannot be configured.

    Missing token, non-positive rate limit or invalid settings. The client
    instance is not created.
    """

    pass


class TransportError(GitHubToolsError):
    """Raised when the HTTP exchange could not complete.

    Wraps httpx errors (connect, DNS, TLS, timeout). Callers that need the
    raw httpx exception should read __cause__, which always holds it.
    """

    pass


class ApiError(GitHubToolsError):
    """Raised when GitHub answered with a non-success status.

    Attributes:
        status_code: HTTP status of the response
        api_message: Message extracted from the response body
    """

    def __init__(self, status_code: int, api_message: str):
        self.status_code = status_code
        self.api_message = api_message
        super().__init__(f"GitHub API error ({status_code}): {api_message}")


def classify_error(status_code: int, raw_body: str) -> ApiError:
    """Build an ApiError from a failed response.

    The body's JSON "message" field is preferred; anything else (invalid
    JSON, non-object JSON, no message, empty body) falls back to the raw
    text verbatim. The same extraction runs for every status code.

    Args:
        status_code: HTTP status of the failed response
        raw_body: Response body as text

    Returns:
        ApiError carrying the status and extracted message
    """
    message = raw_body
    try:
        data = json.loads(raw_body)
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("message"):
        message = str(data["message"])

    logger.debug(
        "github_error_classified",
        extra={"status_code": status_code, "api_message": message[:200]},
    )
    return ApiError(status_code, message)
