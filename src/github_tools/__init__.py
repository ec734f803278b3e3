"""github-tools - GitHub REST operations as schema-validated tools.

Provides:
- GitHubClient: throttled, quota-aware async client for the GitHub REST API
- ToolRegistry / register_tools: named tools with pydantic parameter schemas
- Configuration via pydantic-settings (GITHUB_TOKEN, GITHUB_BASE_URL, GITHUB_RATE_LIMIT)

Python Version: 3.10+ required
"""

# Logging Configuration - configure before other imports
from .logging_config import StructuredFormatter, configure_logging

configure_logging()

from .__version__ import __version__
from .client import GitHubClient, JSONValue, build_path
from .config import ClientIdentity, GitHubToolsConfig, get_config, reset_config
from .errors import (
    ApiError,
    ConfigurationError,
    GitHubToolsError,
    TransportError,
    classify_error,
)
from .quota import QuotaSnapshot, QuotaTracker
from .rate_limiter import RequestThrottle
from .tools import Tool, ToolRegistry, ToolResult, describe_tools, register_tools

__all__ = [
    "ApiError",
    "ClientIdentity",
    "ConfigurationError",
    "GitHubClient",
    "GitHubToolsConfig",
    "GitHubToolsError",
    "JSONValue",
    "QuotaSnapshot",
    "QuotaTracker",
    "RequestThrottle",
    "StructuredFormatter",
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "TransportError",
    "__version__",
    "build_path",
    "classify_error",
    "configure_logging",
    "describe_tools",
    "get_config",
    "register_tools",
    "reset_config",
]
