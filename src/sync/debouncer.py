"""
Webhook-triggered resync scheduling.

Shopify sends one webhook per product change, often in bursts. Every
``notify()`` cancels the pending timer (if any) and arms a new one, so a burst
collapses into a single ``SyncCoordinator.sync()`` once the window has been
quiet for ``delay_seconds``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Set

from src.sync.coordinator import SyncCoordinator

logger = logging.getLogger(__name__)


class RescheduleDebouncer:
    def __init__(self, coordinator: SyncCoordinator, delay_seconds: float = 300.0) -> None:
        self.coordinator = coordinator
        self.delay_seconds = delay_seconds
        self._timer: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def notify(self) -> None:
        """Arm (or re-arm) the delayed resync. Must be called from the event loop."""
        rearmed = self.cancel()
        task = asyncio.get_running_loop().create_task(self._sync_after_delay())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._timer = task
        logger.info(
            "%s catalog resync in %.0f seconds", "Re-armed" if rearmed else "Scheduled", self.delay_seconds
        )

    def cancel(self) -> bool:
        """Cancel the pending timer. Returns True if one was pending."""
        timer, self._timer = self._timer, None
        if timer is not None and not timer.done():
            timer.cancel()
            return True
        return False

    async def aclose(self) -> None:
        """Cancel the pending timer and any resync it already started."""
        self.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _sync_after_delay(self) -> None:
        await asyncio.sleep(self.delay_seconds)
        # The timer has fired; a later notify() arms a new timer instead of
        # cancelling this sync.
        if self._timer is asyncio.current_task():
            self._timer = None

        logger.info("Running debounced catalog resync")
        try:
            result = await self.coordinator.sync()
        except Exception:
            logger.exception("Debounced catalog resync raised")
            return
        if result.success:
            logger.info("Debounced resync synced %d products", result.count)
        else:
            logger.warning("Debounced resync did not complete: %s", result.error)
