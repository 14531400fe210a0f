from __future__ import annotations

import logging
import time

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter as LimitsFixedWindow

from image_server.backend.app.domain.security.interfaces import RateLimitDecision

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    """
    Fixed window counter keyed by client (usually the remote IP).

    Every key gets ``max_requests`` hits per ``window_seconds``. Counting is
    done by the ``limits`` fixed-window strategy; with the default
    ``MemoryStorage`` the state lives in this process only.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        storage: Storage | None = None,
        namespace: str = "image-server",
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._storage = storage or MemoryStorage()
        self._strategy = LimitsFixedWindow(self._storage)
        self._item = RateLimitItemPerSecond(max_requests, window_seconds, namespace=namespace)

    def hit(self, client_key: str) -> RateLimitDecision:
        allowed = self._strategy.hit(self._item, client_key)
        stats = self._strategy.get_window_stats(self._item, client_key)

        if not allowed:
            logger.warning("Rate limit exceeded for %s", client_key)
        return RateLimitDecision(
            allowed=allowed,
            limit=self.max_requests,
            remaining=stats.remaining,
            reset_after=max(stats.reset_time - time.time(), 0.0),
        )

    def allow(self, client_key: str) -> bool:
        return self.hit(client_key).allowed

    def reset(self) -> None:
        self._storage.reset()
