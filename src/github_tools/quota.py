"""Tracking of the quota envelope GitHub advertises in response headers.

Reference: https://docs.github.com/en/rest/using-the-rest-api/rate-limits-for-the-rest-api
"""

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from .metrics import rate_limit_remaining

logger = logging.getLogger("github_tools.quota")

__all__ = [
    "LIMIT_HEADER",
    "REMAINING_HEADER",
    "RESET_HEADER",
    "QuotaSnapshot",
    "QuotaTracker",
]

LIMIT_HEADER = "X-RateLimit-Limit"
REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"


@dataclass(frozen=True)
class QuotaSnapshot:
    """Quota envelope observed on one response.

    Attributes:
        limit: Requests allowed per window
        remaining: Requests left in the current window
        reset: Epoch seconds at which the window resets
    """

    limit: int
    remaining: int
    reset: int

    @property
    def reset_at(self) -> datetime:
        """Reset time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class QuotaTracker:
    """Best-effort cache of the most recent complete quota envelope.

    The snapshot is replaced only when a response carries all three
    headers as integers. Partial or malformed header sets leave the
    previous snapshot in place. Nothing here throttles requests; the
    snapshot is advisory.
    """

    def __init__(self) -> None:
        self._snapshot: QuotaSnapshot | None = None

    @property
    def snapshot(self) -> QuotaSnapshot | None:
        """Most recent complete snapshot, or None if none has been seen."""
        return self._snapshot

    def record_from_headers(self, headers: Mapping[str, str]) -> bool:
        """Update the snapshot from response headers.

        Args:
            headers: Response headers (httpx.Headers is case-insensitive;
                plain dicts must use the canonical header names)

        Returns:
            True if the snapshot was replaced
        """
        raw = (
            headers.get(LIMIT_HEADER),
            headers.get(REMAINING_HEADER),
            headers.get(RESET_HEADER),
        )
        if not all(raw):
            return False

        try:
            limit, remaining, reset = (int(value) for value in raw)
        except ValueError:
            logger.debug(
                "rate_limit_headers_unparseable",
                extra={"limit": raw[0], "remaining": raw[1], "reset": raw[2]},
            )
            return False

        self._snapshot = QuotaSnapshot(limit=limit, remaining=remaining, reset=reset)
        rate_limit_remaining.set(remaining)

        if remaining == 0:
            logger.warning(
                "rate_limit_exhausted",
                extra={"limit": limit, "reset_at": self._snapshot.reset_at.isoformat()},
            )
        return True
