"""GitHub REST API client.

Provides an async httpx-based client for the GitHub REST API with Bearer
token auth. Every call goes through one request path that paces dispatches
with a fixed-interval throttle, records the X-RateLimit-* quota envelope,
classifies error responses and decodes bodies by content type.

No retries, no response caching and no pagination traversal: page and
per_page are passed through to GitHub untouched.

Reference: https://docs.github.com/en/rest
"""

import json
import logging
import time
from typing import Any, Union
from urllib.parse import quote, urlencode

import httpx

from .config import ClientIdentity, GitHubToolsConfig
from .errors import ApiError, TransportError, classify_error
from .metrics import failures_total, request_duration_seconds, requests_total
from .quota import QuotaSnapshot, QuotaTracker
from .rate_limiter import RequestThrottle

logger = logging.getLogger("github_tools.client")

__all__ = ["GitHubClient", "JSONValue", "build_path"]

JSONValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop entries whose value is None."""
    return {k: v for k, v in values.items() if v is not None}


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_path(path: str, params: dict[str, Any] | None = None) -> str:
    """Append a query string built from the parameters that are set.

    None values are omitted entirely; if nothing remains, no '?' is added.

    Args:
        path: API path without query string
        params: Query parameters in the order they should appear

    Returns:
        Path with encoded query string
    """
    query = urlencode([(k, _query_value(v)) for k, v in _compact(params or {}).items()])
    return f"{path}?{query}" if query else path


class GitHubClient:
    """GitHub REST API client using httpx with Bearer token auth.

    Uses one long-lived httpx.AsyncClient per instance. Construct it
    explicitly and hand it to whatever needs it; instances share no state.

    Attributes:
        base_url: GitHub API base URL (default: https://api.github.com)
        rate_limit: Configured requests-per-second ceiling
        quota_snapshot: Last complete X-RateLimit-* envelope, or None

    Example:
        >>> async with GitHubClient(token="ghp_token") as client:
        ...     repo = await client.get_repo("octocat", "hello-world")
        ...     print(client.quota_snapshot)
    """

    ACCEPT = "application/vnd.github+json"
    API_VERSION = "2022-11-28"
    USER_AGENT = "github-tools/0.3"

    # Timeout configuration
    CONNECT_TIMEOUT = 5.0  # seconds
    READ_TIMEOUT = 30.0  # seconds

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        rate_limit: float | None = None,
        config: GitHubToolsConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub client.

        Explicit arguments win over GITHUB_TOKEN / GITHUB_BASE_URL /
        GITHUB_RATE_LIMIT from the environment or .env.

        Args:
            token: GitHub token (falls back to GITHUB_TOKEN)
            base_url: API root (default: https://api.github.com)
            rate_limit: Requests per second (default: 10)
            config: Settings to fall back on instead of get_config()
            transport: Optional httpx transport (tests, proxies)

        Raises:
            ConfigurationError: If no token is available or rate_limit <= 0
        """
        self._identity = ClientIdentity.resolve(
            token=token, base_url=base_url, rate_limit=rate_limit, config=config
        )
        self._throttle = RequestThrottle(self._identity.rate_limit)
        self._quota = QuotaTracker()

        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self._identity.token}",
                "Accept": self.ACCEPT,
                "X-GitHub-Api-Version": self.API_VERSION,
                "User-Agent": self.USER_AGENT,
            },
            timeout=httpx.Timeout(self.READ_TIMEOUT, connect=self.CONNECT_TIMEOUT),
            transport=transport,
        )

        logger.debug(
            "github_client_initialized",
            extra={"base_url": self.base_url, "rate_limit": self.rate_limit},
        )

    @property
    def base_url(self) -> str:
        return self._identity.base_url

    @property
    def rate_limit(self) -> float:
        return self._identity.rate_limit

    @property
    def quota_snapshot(self) -> QuotaSnapshot | None:
        """Quota envelope from the most recent response that carried one."""
        return self._quota.snapshot

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit -- close httpx client."""
        await self.close()

    async def close(self) -> None:
        """Close the httpx client and release connections."""
        await self._client.aclose()

    # --- Core HTTP Method ---

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> JSONValue:
        """Make a single throttled API request.

        Args:
            method: HTTP method (GET, POST, PATCH)
            path: API path including any query string, appended to base_url as-is
            body: JSON-serializable payload, sent when not None
            headers: Extra headers merged over the defaults

        Returns:
            Decoded JSON for application/json responses, raw text otherwise

        Raises:
            TransportError: If the HTTP exchange could not complete
            ApiError: If GitHub responded with a non-2xx status, or with a
                JSON content type and a body that does not decode
        """
        await self._throttle.throttle()

        request_headers = dict(headers or {})
        content = None
        if body is not None:
            content = json.dumps(body)
            request_headers["Content-Type"] = "application/json"

        url = f"{self.base_url}{path}"
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method, url, content=content, headers=request_headers
            )
        except httpx.HTTPError as e:
            requests_total.labels(method=method, status="transport_error").inc()
            failures_total.labels(error_type="transport_error").inc()
            logger.error(
                "github_transport_error",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise TransportError(f"HTTP error: {e}") from e
        finally:
            request_duration_seconds.labels(method=method).observe(
                time.perf_counter() - start
            )

        self._quota.record_from_headers(response.headers)
        requests_total.labels(method=method, status=str(response.status_code)).inc()

        if not 200 <= response.status_code < 300:
            error = classify_error(response.status_code, response.text)
            failures_total.labels(error_type="api_error").inc()
            logger.warning(
                "github_request_failed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": error.status_code,
                    "api_message": error.api_message[:200],
                },
            )
            raise error

        logger.debug(
            "github_request_completed",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                failures_total.labels(error_type="decode_error").inc()
                logger.warning(
                    "github_response_undecodable",
                    extra={"method": method, "path": path, "error": str(e)},
                )
                raise ApiError(response.status_code, f"Invalid JSON response: {e}") from e
        return response.text

    # --- Repositories ---

    async def list_user_repos(
        self,
        type: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        """List repositories for the authenticated user.

        Args:
            type: all, owner, public, private, member
            sort: created, updated, pushed, full_name
            page: Page number
            per_page: Results per page

        Returns:
            List of repository dicts
        """
        return await self.request(
            "GET",
            build_path(
                "/user/repos",
                {"page": page, "per_page": per_page, "type": type, "sort": sort},
            ),
        )

    async def get_repo(self, owner: str, repo: str) -> JSONValue:
        return await self.request("GET", f"/repos/{owner}/{repo}")

    async def create_repo(
        self,
        name: str,
        description: str | None = None,
        private: bool | None = None,
        auto_init: bool | None = None,
    ) -> JSONValue:
        """Create a repository owned by the authenticated user.

        Args:
            name: Repository name
            description: Short description
            private: Create as private repository
            auto_init: Create an initial commit with a README

        Returns:
            Created repository dict
        """
        payload = _compact(
            {
                "name": name,
                "description": description,
                "private": private,
                "auto_init": auto_init,
            }
        )
        return await self.request("POST", "/user/repos", payload)

    # --- Issues ---

    async def list_issues(
        self,
        owner: str,
        repo: str,
        state: str | None = None,
        labels: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        """List repository issues (one page).

        Args:
            owner: Repository owner
            repo: Repository name
            state: open, closed, all
            labels: Comma-separated label names
            page: Page number
            per_page: Results per page

        Returns:
            List of issue dicts (GitHub includes pull requests here)
        """
        return await self.request(
            "GET",
            build_path(
                f"/repos/{owner}/{repo}/issues",
                {"page": page, "per_page": per_page, "state": state, "labels": labels},
            ),
        )

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> JSONValue:
        return await self.request("GET", f"/repos/{owner}/{repo}/issues/{issue_number}")

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> JSONValue:
        payload = _compact(
            {"title": title, "body": body, "labels": labels, "assignees": assignees}
        )
        return await self.request("POST", f"/repos/{owner}/{repo}/issues", payload)

    async def update_issue(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
        labels: list[str] | None = None,
    ) -> JSONValue:
        """Update an existing issue.

        Only the fields that are set are sent, so omitted fields keep their
        current value on GitHub.
        """
        payload = _compact(
            {"title": title, "body": body, "state": state, "labels": labels}
        )
        return await self.request(
            "PATCH", f"/repos/{owner}/{repo}/issues/{issue_number}", payload
        )

    # --- Pull Requests ---

    async def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str | None = None,
        head: str | None = None,
        base: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        """List repository pull requests (one page).

        Args:
            owner: Repository owner
            repo: Repository name
            state: open, closed, all
            head: Filter by head user or branch (user:ref-name)
            base: Filter by base branch
            page: Page number
            per_page: Results per page

        Returns:
            List of PR dicts
        """
        return await self.request(
            "GET",
            build_path(
                f"/repos/{owner}/{repo}/pulls",
                {
                    "page": page,
                    "per_page": per_page,
                    "state": state,
                    "head": head,
                    "base": base,
                },
            ),
        )

    async def get_pull_request(
        self, owner: str, repo: str, pull_number: int
    ) -> JSONValue:
        return await self.request("GET", f"/repos/{owner}/{repo}/pulls/{pull_number}")

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        draft: bool | None = None,
    ) -> JSONValue:
        payload = _compact(
            {"title": title, "head": head, "base": base, "body": body, "draft": draft}
        )
        return await self.request("POST", f"/repos/{owner}/{repo}/pulls", payload)

    # --- Branches ---

    async def list_branches(
        self,
        owner: str,
        repo: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        return await self.request(
            "GET",
            build_path(
                f"/repos/{owner}/{repo}/branches",
                {"page": page, "per_page": per_page},
            ),
        )

    # --- Contents ---

    async def get_file_content(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: str | None = None,
    ) -> JSONValue:
        """Get file or directory content from a repository.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path in repository ('/' separators kept)
            ref: Branch/tag/commit to read from (default: repo default branch)

        Returns:
            Content dict with type, content (base64), sha, size, etc.
        """
        return await self.request(
            "GET",
            build_path(
                f"/repos/{owner}/{repo}/contents/{quote(path.lstrip('/'), safe='/')}",
                {"ref": ref},
            ),
        )

    # --- Search ---

    async def search_repositories(
        self,
        query: str,
        sort: str | None = None,
        order: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        """Search repositories.

        Args:
            query: Search query (e.g., 'react stars:>1000')
            sort: stars, forks, help-wanted-issues, updated
            order: asc, desc
            page: Page number
            per_page: Results per page

        Returns:
            Search result dict with total_count and items
        """
        return await self.request(
            "GET",
            build_path(
                "/search/repositories",
                {
                    "q": query,
                    "page": page,
                    "per_page": per_page,
                    "sort": sort,
                    "order": order,
                },
            ),
        )

    async def search_code(
        self,
        query: str,
        sort: str | None = None,
        order: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        return await self.request(
            "GET",
            build_path(
                "/search/code",
                {
                    "q": query,
                    "page": page,
                    "per_page": per_page,
                    "sort": sort,
                    "order": order,
                },
            ),
        )

    # --- Commits ---

    async def list_commits(
        self,
        owner: str,
        repo: str,
        sha: str | None = None,
        path: str | None = None,
        author: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> JSONValue:
        """List repository commits (one page).

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Branch name or commit SHA to start from
            path: Only commits containing this file path
            author: GitHub login or email address
            page: Page number
            per_page: Results per page

        Returns:
            List of commit dicts
        """
        return await self.request(
            "GET",
            build_path(
                f"/repos/{owner}/{repo}/commits",
                {
                    "page": page,
                    "per_page": per_page,
                    "sha": sha,
                    "path": path,
                    "author": author,
                },
            ),
        )

    # --- Quota ---

    def get_rate_limit_status(self) -> dict[str, Any]:
        """Get the captured quota envelope for tools and logging.

        Returns:
            Dict with available flag, and limit/remaining/reset/reset_at
            when a snapshot has been captured
        """
        snapshot = self._quota.snapshot
        if snapshot is None:
            return {"available": False}
        return {
            "available": True,
            **snapshot.as_dict(),
            "reset_at": snapshot.reset_at.isoformat(),
        }
