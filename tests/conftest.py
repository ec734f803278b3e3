"""Shared pytest fixtures for github-tools tests.

Fixture Organization:
    - Environment isolation: config singleton reset, GITHUB_* variables cleared
    - Client fixtures: GitHubClient backed by httpx.MockTransport
    - Response helpers: canned httpx.Response builders
"""

import json
from collections.abc import Callable

import httpx
import pytest

from github_tools.client import GitHubClient
from github_tools.config import GitHubToolsConfig, reset_config

TEST_TOKEN = "ghp_test_token_123"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep GITHUB_* variables and any .env file out of every test."""
    for var in ("GITHUB_TOKEN", "GITHUB_BASE_URL", "GITHUB_RATE_LIMIT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def empty_config() -> GitHubToolsConfig:
    """Settings with nothing loaded from the environment."""
    return GitHubToolsConfig(_env_file=None)


def json_response(
    data,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """httpx.Response with a JSON body and GitHub's content type."""
    return httpx.Response(
        status_code,
        content=json.dumps(data).encode(),
        headers={"Content-Type": "application/json; charset=utf-8", **(headers or {})},
    )


def text_response(
    text: str,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """httpx.Response with a plain-text body."""
    return httpx.Response(
        status_code,
        content=text.encode(),
        headers={"Content-Type": "text/plain; charset=utf-8", **(headers or {})},
    )


class RecordingTransport(httpx.AsyncBaseTransport):
    """MockTransport-style transport that keeps every request it receives."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client(empty_config):
    """Build a GitHubClient whose transport answers with `responder`.

    Returns (client, transport). The rate limit is high enough that the
    throttle never noticeably delays a test.
    """

    def _make(
        responder: Callable[[httpx.Request], httpx.Response] | None = None,
        **kwargs,
    ) -> tuple[GitHubClient, RecordingTransport]:
        transport = RecordingTransport(responder or (lambda request: json_response({})))
        kwargs.setdefault("token", TEST_TOKEN)
        kwargs.setdefault("rate_limit", 10_000)
        client = GitHubClient(config=empty_config, transport=transport, **kwargs)
        return client, transport

    return _make
