# src/docdigest/throttling.py

"""Request throttling collaborators.

Limiters are injected with an explicit key and window; nothing here keeps
process-wide state.
"""

import logging
from typing import Protocol

from limits import RateLimitItemPerSecond, storage, strategies

logger = logging.getLogger(__name__)


class RateLimiter(Protocol):
    def hit(self, key: str) -> bool:
        """Consume one unit for ``key``. Returns False when over the limit."""
        ...


class MovingWindowRateLimiter:
    """At most ``limit`` hits per key in any ``window_seconds`` window.

    ``storage_uri`` selects the ``limits`` backend, e.g. ``redis://host:6379``
    to share limits between processes.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: int,
        storage_uri: str = "memory://",
        namespace: str = "docdigest",
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be > 0")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self._item = RateLimitItemPerSecond(limit, window_seconds)
        self._limiter = strategies.MovingWindowRateLimiter(
            storage.storage_from_string(storage_uri)
        )
        self._namespace = namespace
        logger.info(
            "Initialized MovingWindowRateLimiter: %d per %ds (%s)",
            limit,
            window_seconds,
            storage_uri,
        )

    def hit(self, key: str) -> bool:
        allowed = self._limiter.hit(self._item, self._namespace, key)
        if not allowed:
            logger.warning("Rate limit exceeded for key=%s", key)
        return allowed

    def reset(self, key: str) -> None:
        self._limiter.clear(self._item, self._namespace, key)
