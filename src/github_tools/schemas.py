"""Pydantic parameter schemas for every GitHub tool.

Each model validates the parameters a host passes to one tool before the
call reaches GitHubClient. Field names match the client method keywords,
so a validated model can be splatted straight into the method.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "CreateIssueParams",
    "CreatePullRequestParams",
    "CreateRepoParams",
    "GetFileContentParams",
    "GetIssueParams",
    "GetPullRequestParams",
    "GetRateLimitParams",
    "GetRepoParams",
    "ListBranchesParams",
    "ListCommitsParams",
    "ListIssuesParams",
    "ListPullRequestsParams",
    "ListReposParams",
    "SearchCodeParams",
    "SearchReposParams",
    "ToolParams",
    "UpdateIssueParams",
]


class ToolParams(BaseModel):
    """Base for tool parameter models: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class PaginationParams(ToolParams):
    page: int | None = Field(default=None, ge=1, description="Page number")
    per_page: int | None = Field(
        default=None, ge=1, le=100, description="Results per page (max 100)"
    )


class RepoRef(ToolParams):
    owner: str = Field(..., min_length=1, description="Repository owner username")
    repo: str = Field(..., min_length=1, description="Repository name")


# =============================================================================
# Repositories
# =============================================================================


class ListReposParams(PaginationParams):
    type: Literal["all", "owner", "public", "private", "member"] | None = Field(
        default=None, description="Repository type filter"
    )
    sort: Literal["created", "updated", "pushed", "full_name"] | None = Field(
        default=None, description="Sort order"
    )


class GetRepoParams(RepoRef):
    pass


class CreateRepoParams(ToolParams):
    name: str = Field(..., min_length=1, description="Repository name")
    description: str | None = Field(default=None, description="Repository description")
    private: bool | None = Field(default=None, description="Create as private repository")
    auto_init: bool | None = Field(default=None, description="Initialize with README")


# =============================================================================
# Issues
# =============================================================================


class ListIssuesParams(RepoRef, PaginationParams):
    state: Literal["open", "closed", "all"] | None = Field(
        default=None, description="Issue state filter"
    )
    labels: str | None = Field(
        default=None, description="Comma-separated list of label names"
    )


class GetIssueParams(RepoRef):
    issue_number: int = Field(..., ge=1, description="Issue number")


class CreateIssueParams(RepoRef):
    title: str = Field(..., min_length=1, description="Issue title")
    body: str | None = Field(default=None, description="Issue body content")
    labels: list[str] | None = Field(default=None, description="Array of label names")
    assignees: list[str] | None = Field(
        default=None, description="Array of usernames to assign"
    )


class UpdateIssueParams(RepoRef):
    issue_number: int = Field(..., ge=1, description="Issue number")
    title: str | None = Field(default=None, description="Issue title")
    body: str | None = Field(default=None, description="Issue body content")
    state: Literal["open", "closed"] | None = Field(default=None, description="Issue state")
    labels: list[str] | None = Field(default=None, description="Array of label names")


# =============================================================================
# Pull Requests
# =============================================================================


class ListPullRequestsParams(RepoRef, PaginationParams):
    state: Literal["open", "closed", "all"] | None = Field(
        default=None, description="PR state filter"
    )
    head: str | None = Field(
        default=None, description="Filter by head user or branch (user:ref-name)"
    )
    base: str | None = Field(default=None, description="Filter by base branch")


class GetPullRequestParams(RepoRef):
    pull_number: int = Field(..., ge=1, description="Pull request number")


class CreatePullRequestParams(RepoRef):
    title: str = Field(..., min_length=1, description="Pull request title")
    head: str = Field(..., description="The name of the branch where your changes are")
    base: str = Field(
        ..., description="The name of the branch you want changes pulled into"
    )
    body: str | None = Field(default=None, description="Pull request description")
    draft: bool | None = Field(default=None, description="Create as draft PR")


# =============================================================================
# Branches, Contents, Commits
# =============================================================================


class ListBranchesParams(RepoRef, PaginationParams):
    pass


class GetFileContentParams(RepoRef):
    path: str = Field(..., min_length=1, description="File path in repository")
    ref: str | None = Field(default=None, description="Branch, tag, or commit SHA")


class ListCommitsParams(RepoRef, PaginationParams):
    sha: str | None = Field(default=None, description="Branch or commit SHA to start from")
    path: str | None = Field(
        default=None, description="Only commits containing this file path"
    )
    author: str | None = Field(
        default=None, description="GitHub username or email address"
    )


# =============================================================================
# Search
# =============================================================================


class SearchReposParams(PaginationParams):
    query: str = Field(
        ..., min_length=1, description="Search query (e.g., 'react stars:>1000')"
    )
    sort: Literal["stars", "forks", "help-wanted-issues", "updated"] | None = Field(
        default=None, description="Sort field"
    )
    order: Literal["asc", "desc"] | None = Field(default=None, description="Sort order")


class SearchCodeParams(PaginationParams):
    query: str = Field(
        ...,
        min_length=1,
        description="Search query (e.g., 'addClass in:file language:js repo:jquery/jquery')",
    )
    sort: Literal["indexed"] | None = Field(default=None, description="Sort field")
    order: Literal["asc", "desc"] | None = Field(default=None, description="Sort order")


class GetRateLimitParams(ToolParams):
    pass
