"""
Request pacing for paginated Shopify fetches
"""
import asyncio
import logging
import time
from collections import deque

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Sliding-window limiter awaited before each page request.

    Sleeping goes through asyncio so status requests are still served while
    a long fetch is being paced.
    """

    def __init__(self, requests_per_minute: int, window_seconds: float = 60.0):
        # 0 turns pacing off
        self.requests_per_minute = requests_per_minute
        self.window_seconds = window_seconds
        self._sent: deque = deque()

    def _expire(self, now: float) -> None:
        while self._sent and now - self._sent[0] > self.window_seconds:
            self._sent.popleft()

    async def wait_if_needed(self) -> None:
        if not self.requests_per_minute:
            return

        now = time.monotonic()
        self._expire(now)
        if len(self._sent) >= self.requests_per_minute:
            delay = self.window_seconds - (now - self._sent[0]) + 0.1
            if delay > 0:
                logger.debug("Page request budget spent, pausing %.2fs", delay)
                await asyncio.sleep(delay)
                self._expire(time.monotonic())

        self._sent.append(time.monotonic())

    def requests_in_window(self) -> int:
        """Number of page requests sent inside the current window."""
        self._expire(time.monotonic())
        return len(self._sent)
