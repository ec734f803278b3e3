"""Logging setup for the github_tools logger tree.

Records are emitted as one JSON object per line (or plain text when
GITHUB_TOOLS_LOG_FORMAT=text). Extras passed via ``extra=`` land under
"context"; any key that looks like a credential is masked, since every
request carries a bearer token.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

__all__ = [
    "LOGGER_NAMESPACE",
    "SENSITIVE_KEYS",
    "StructuredFormatter",
    "TextFormatter",
    "configure_logging",
]

LOGGER_NAMESPACE = "github_tools"

SENSITIVE_KEYS = frozenset(
    {"token", "github_token", "authorization", "bearer", "password", "secret"}
)

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: "[REDACTED]" if key.lower() in SENSITIVE_KEYS else value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the github_tools logger.

    Args:
        level: Log level name. Defaults to GITHUB_TOOLS_LOG_LEVEL, then INFO.
    """
    level = level or os.getenv("GITHUB_TOOLS_LOG_LEVEL", "INFO")
    text = os.getenv("GITHUB_TOOLS_LOG_FORMAT", "json").lower() == "text"

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only once, however many times the package is imported
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(TextFormatter() if text else StructuredFormatter())
        logger.addHandler(handler)

    logger.propagate = False
