"""Fixed-interval request throttle.

Spaces dispatches at least 1/rate_limit seconds apart. This is not a token
bucket: bursts are never allowed and idle time earns no credit, so after a
long pause the next two requests are still one interval apart.
"""

import asyncio
import logging
import time

from .errors import ConfigurationError
from .metrics import throttle_wait_seconds

logger = logging.getLogger("github_tools.rate_limiter")

__all__ = ["RequestThrottle"]


class RequestThrottle:
    """Minimum-interval pacing for one client instance.

    The last-dispatch timestamp comes from time.monotonic(), so it never
    decreases. The check-sleep-record sequence runs under an asyncio.Lock:
    concurrent tasks sharing a client queue up behind each other instead of
    racing on a stale timestamp.

    Example:
        >>> throttle = RequestThrottle(rate_limit=10)
        >>> await throttle.throttle()  # returns immediately
        >>> await throttle.throttle()  # waits ~100ms
    """

    def __init__(self, rate_limit: float):
        """Initialize throttle.

        Args:
            rate_limit: Maximum requests per second, must be > 0

        Raises:
            ConfigurationError: If rate_limit is zero or negative
        """
        if rate_limit <= 0:
            raise ConfigurationError(
                f"Rate limit must be a positive number of requests per second, got {rate_limit}"
            )
        self.rate_limit = rate_limit
        self.min_interval = 1.0 / rate_limit
        self._last_dispatch: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_dispatch(self) -> float | None:
        """Monotonic timestamp of the last permitted dispatch, None before the first."""
        return self._last_dispatch

    async def throttle(self) -> float:
        """Suspend until the next dispatch is permitted.

        Returns:
            Seconds spent waiting (0.0 when no delay was needed)
        """
        async with self._lock:
            waited = 0.0
            if self._last_dispatch is not None:
                elapsed = time.monotonic() - self._last_dispatch
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    logger.debug(
                        "rate_limit_throttled",
                        extra={"wait_seconds": round(waited, 4), "rate_limit": self.rate_limit},
                    )
                    await asyncio.sleep(waited)

            self._last_dispatch = time.monotonic()

        throttle_wait_seconds.observe(waited)
        return waited
