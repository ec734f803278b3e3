"""Configuration management with pydantic-settings for github-tools.

Loads from (in order of precedence):
1. Environment variables (highest priority)
2. .env file in the working directory
3. Default values (lowest priority)

Only the settings the request layer needs live here: the API token, the
API base URL and the requests-per-second ceiling. Explicit constructor
arguments on GitHubClient take precedence over anything loaded here.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

logger = logging.getLogger("github_tools.config")

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_RATE_LIMIT",
    "ClientIdentity",
    "GitHubToolsConfig",
    "get_config",
    "reset_config",
]

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_RATE_LIMIT = 10.0  # requests per second


class GitHubToolsConfig(BaseSettings):
    """Settings for the GitHub request layer.

    Attributes:
        github_token: Personal access token (GITHUB_TOKEN), stored as SecretStr
        github_base_url: REST API root (GITHUB_BASE_URL), e.g. a GHES /api/v3 URL
        github_rate_limit: Requests-per-second ceiling (GITHUB_RATE_LIMIT)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,  # Use defaults instead of empty strings
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    github_token: SecretStr | None = Field(
        default=None,
        description="GitHub token sent as a Bearer credential on every request",
    )
    github_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="GitHub REST API base URL",
    )
    github_rate_limit: float = Field(
        default=DEFAULT_RATE_LIMIT,
        gt=0,
        description="Maximum requests per second issued by one client",
    )

    @field_validator("github_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are appended verbatim, so the base must not end with '/'."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"github_base_url must be an http(s) URL, got {v!r}")
        return v


@dataclass(frozen=True)
class ClientIdentity:
    """Immutable credentials and pacing settings of one client instance."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    rate_limit: float = DEFAULT_RATE_LIMIT

    def __repr__(self) -> str:
        return (
            f"ClientIdentity(token='***', base_url={self.base_url!r}, "
            f"rate_limit={self.rate_limit!r})"
        )

    @classmethod
    def resolve(
        cls,
        token: str | None = None,
        base_url: str | None = None,
        rate_limit: float | None = None,
        config: GitHubToolsConfig | None = None,
    ) -> "ClientIdentity":
        """Merge explicit arguments over loaded configuration.

        Args:
            token: Explicit token; falls back to GITHUB_TOKEN
            base_url: Explicit API root; falls back to GITHUB_BASE_URL
            rate_limit: Explicit requests/second; falls back to GITHUB_RATE_LIMIT
            config: Settings instance to fall back on (default: get_config())

        Returns:
            Resolved ClientIdentity

        Raises:
            ConfigurationError: If no token resolves, the rate limit is not
                positive, or the environment holds invalid settings.
        """
        if config is None:
            try:
                config = get_config()
            except ValidationError as e:
                raise ConfigurationError(f"Invalid GitHub configuration: {e}") from e

        if not token and config.github_token is not None:
            token = config.github_token.get_secret_value()
        if not token:
            raise ConfigurationError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        rate = config.github_rate_limit if rate_limit is None else rate_limit
        if rate <= 0:
            raise ConfigurationError(
                f"Rate limit must be a positive number of requests per second, got {rate}"
            )

        return cls(
            token=token,
            base_url=(base_url or config.github_base_url).rstrip("/"),
            rate_limit=float(rate),
        )


@lru_cache(maxsize=1)
def get_config() -> GitHubToolsConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Raises:
        ValidationError: If configuration values are invalid.
    """
    return GitHubToolsConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()
