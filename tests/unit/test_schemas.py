"""Unit tests for tool parameter schemas."""

import pytest
from pydantic import ValidationError

from github_tools.schemas import (
    CreatePullRequestParams,
    GetFileContentParams,
    ListIssuesParams,
    ListReposParams,
    SearchCodeParams,
    SearchReposParams,
    UpdateIssueParams,
)


class TestPagination:
    """page / per_page are optional passthroughs."""

    def test_optional(self):
        params = ListIssuesParams(owner="o", repo="r")
        assert params.page is None
        assert params.per_page is None

    def test_per_page_capped(self):
        with pytest.raises(ValidationError):
            ListIssuesParams(owner="o", repo="r", per_page=101)

    def test_page_positive(self):
        with pytest.raises(ValidationError):
            ListReposParams(page=0)


class TestEnumerations:
    """Filters are restricted to the values GitHub accepts."""

    @pytest.mark.parametrize("state", ["open", "closed", "all"])
    def test_issue_list_states(self, state):
        assert ListIssuesParams(owner="o", repo="r", state=state).state == state

    def test_update_issue_cannot_set_all(self):
        with pytest.raises(ValidationError):
            UpdateIssueParams(owner="o", repo="r", issue_number=1, state="all")

    def test_repo_type(self):
        with pytest.raises(ValidationError):
            ListReposParams(type="forks")

    def test_search_sorts_differ(self):
        assert SearchReposParams(query="x", sort="stars").sort == "stars"
        with pytest.raises(ValidationError):
            SearchCodeParams(query="x", sort="stars")


class TestRequiredFields:
    def test_pull_request_requires_branches(self):
        with pytest.raises(ValidationError) as exc_info:
            CreatePullRequestParams(owner="o", repo="r", title="t")
        missing = {error["loc"][0] for error in exc_info.value.errors()}
        assert missing == {"head", "base"}

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            GetFileContentParams(owner="o", repo="r", path="")

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            GetFileContentParams(owner="o", repo="r", path="a", branch="main")


class TestDump:
    def test_exclude_none_matches_method_kwargs(self):
        params = ListIssuesParams(owner="o", repo="r", labels="bug,ui")
        assert params.model_dump(exclude_none=True) == {
            "owner": "o",
            "repo": "r",
            "labels": "bug,ui",
        }
