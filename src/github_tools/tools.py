"""Tool registry exposing GitHubClient operations to a host.

Each tool has a stable name, a description and a pydantic parameter model.
ToolRegistry.call() validates the host's parameters, runs the operation and
renders the outcome as text. Failures never escape call(): they come back
as a ToolResult with is_error=True.

Example:
    >>> registry = ToolRegistry()
    >>> register_tools(registry, GitHubClient(token="ghp_token"))
    >>> result = await registry.call("github_get_repo", {"owner": "o", "repo": "r"})
    >>> result.to_content()
    {'content': [{'type': 'text', 'text': '{...}'}], 'isError': False}
"""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .client import GitHubClient
from .errors import GitHubToolsError
from .schemas import (
    CreateIssueParams,
    CreatePullRequestParams,
    CreateRepoParams,
    GetFileContentParams,
    GetIssueParams,
    GetPullRequestParams,
    GetRateLimitParams,
    GetRepoParams,
    ListBranchesParams,
    ListCommitsParams,
    ListIssuesParams,
    ListPullRequestsParams,
    ListReposParams,
    SearchCodeParams,
    SearchReposParams,
    ToolParams,
    UpdateIssueParams,
)

logger = logging.getLogger("github_tools.tools")

__all__ = [
    "TOOL_DEFINITIONS",
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "describe_tools",
    "register_tools",
]

ToolHandler = Callable[[ToolParams], Awaitable[Any]]


@dataclass(frozen=True)
class ToolResult:
    """Text-rendered outcome of one tool call."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, value: Any) -> "ToolResult":
        return cls(text=json.dumps(value, indent=2))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)

    def to_content(self) -> dict[str, Any]:
        """Host envelope: a single text content block plus the error flag."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


@dataclass(frozen=True)
class Tool:
    """A named, described, schema-validated action."""

    name: str
    description: str
    schema: type[ToolParams]
    handler: ToolHandler

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.schema.model_json_schema(),
        }


class ToolRegistry:
    """Name-indexed collection of tools."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(
        self,
        name: str,
        description: str,
        schema: type[ToolParams],
        handler: ToolHandler,
    ) -> Tool:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        tool = Tool(name=name, description=description, schema=schema, handler=handler)
        self._tools[name] = tool
        return tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        """Describe every tool (name, description, JSON schema) in registration order."""
        return [tool.describe() for tool in self._tools.values()]

    async def call(self, name: str, params: dict[str, Any] | None = None) -> ToolResult:
        """Validate parameters, run the tool and render the result.

        Args:
            name: Registered tool name
            params: Raw parameters from the host

        Returns:
            ToolResult with the JSON-rendered value, or an error result
        """
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult.failure(f"Unknown tool: {name}")

        try:
            validated = tool.schema.model_validate(params or {})
        except ValidationError as e:
            logger.info(
                "tool_params_invalid",
                extra={"tool": name, "error_count": e.error_count()},
            )
            return ToolResult.failure(f"Invalid parameters for {name}: {e}")

        try:
            value = await tool.handler(validated)
        except GitHubToolsError as e:
            logger.warning("tool_call_failed", extra={"tool": name, "error": str(e)})
            return ToolResult.failure(str(e))

        return ToolResult.success(value)


def _bind(operation: Callable[..., Awaitable[Any]]) -> ToolHandler:
    """Adapt a client method to a handler taking the validated model."""

    async def handler(params: ToolParams) -> Any:
        return await operation(**params.model_dump(exclude_none=True))

    return handler


def _operation(method_name: str) -> Callable[[GitHubClient], ToolHandler]:
    def factory(client: GitHubClient) -> ToolHandler:
        return _bind(getattr(client, method_name))

    return factory


def _rate_limit_status(client: GitHubClient) -> ToolHandler:
    async def handler(params: ToolParams) -> dict[str, Any]:
        return client.get_rate_limit_status()

    return handler


# name, description, parameter model, handler factory taking the client
TOOL_DEFINITIONS: list[
    tuple[str, str, type[ToolParams], Callable[[GitHubClient], ToolHandler]]
] = [
    # Repositories
    (
        "github_list_repos",
        "List repositories for the authenticated user",
        ListReposParams,
        _operation("list_user_repos"),
    ),
    (
        "github_get_repo",
        "Get details of a specific repository",
        GetRepoParams,
        _operation("get_repo"),
    ),
    (
        "github_create_repo",
        "Create a new repository for the authenticated user",
        CreateRepoParams,
        _operation("create_repo"),
    ),
    # Issues
    (
        "github_list_issues",
        "List issues for a repository",
        ListIssuesParams,
        _operation("list_issues"),
    ),
    (
        "github_get_issue",
        "Get details of a specific issue",
        GetIssueParams,
        _operation("get_issue"),
    ),
    (
        "github_create_issue",
        "Create a new issue in a repository",
        CreateIssueParams,
        _operation("create_issue"),
    ),
    (
        "github_update_issue",
        "Update an existing issue",
        UpdateIssueParams,
        _operation("update_issue"),
    ),
    # Pull requests
    (
        "github_list_pull_requests",
        "List pull requests for a repository",
        ListPullRequestsParams,
        _operation("list_pull_requests"),
    ),
    (
        "github_get_pull_request",
        "Get details of a specific pull request",
        GetPullRequestParams,
        _operation("get_pull_request"),
    ),
    (
        "github_create_pull_request",
        "Create a new pull request",
        CreatePullRequestParams,
        _operation("create_pull_request"),
    ),
    # Branches, contents, search, commits
    (
        "github_list_branches",
        "List branches in a repository",
        ListBranchesParams,
        _operation("list_branches"),
    ),
    (
        "github_get_file_content",
        "Get the contents of a file in a repository",
        GetFileContentParams,
        _operation("get_file_content"),
    ),
    (
        "github_search_repos",
        "Search for repositories on GitHub",
        SearchReposParams,
        _operation("search_repositories"),
    ),
    (
        "github_search_code",
        "Search for code across GitHub repositories",
        SearchCodeParams,
        _operation("search_code"),
    ),
    (
        "github_list_commits",
        "List commits in a repository",
        ListCommitsParams,
        _operation("list_commits"),
    ),
    # Quota
    (
        "github_get_rate_limit",
        "Show the rate limit quota GitHub reported on the most recent response",
        GetRateLimitParams,
        _rate_limit_status,
    ),
]


def describe_tools() -> list[dict[str, Any]]:
    """Describe every GitHub tool without needing a configured client."""
    return [
        {
            "name": name,
            "description": description,
            "input_schema": schema.model_json_schema(),
        }
        for name, description, schema, _ in TOOL_DEFINITIONS
    ]


def register_tools(registry: ToolRegistry, client: GitHubClient) -> ToolRegistry:
    """Register every GitHub tool against an explicitly owned client.

    Args:
        registry: Registry to populate
        client: Client the tools will call

    Returns:
        The same registry, for chaining
    """
    for name, description, schema, factory in TOOL_DEFINITIONS:
        registry.register(name, description, schema, factory(client))

    logger.debug("tools_registered", extra={"count": len(TOOL_DEFINITIONS)})
    return registry
