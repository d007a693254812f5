import asyncio

import pytest

from src.integrations.contracts.catalog import SyncResult
from src.sync.debouncer import RescheduleDebouncer


class CountingCoordinator:
    def __init__(self, hold: asyncio.Event = None):
        self.calls = 0
        self.hold = hold

    async def sync(self):
        self.calls += 1
        if self.hold is not None:
            await self.hold.wait()
        return SyncResult(success=True, count=1, files=[])


@pytest.mark.asyncio
async def test_burst_of_notifications_triggers_one_sync():
    coordinator = CountingCoordinator()
    debouncer = RescheduleDebouncer(coordinator, delay_seconds=0.05)

    for _ in range(5):
        debouncer.notify()
        await asyncio.sleep(0.01)

    assert debouncer.pending is True
    await asyncio.sleep(0.2)

    assert coordinator.calls == 1
    assert debouncer.pending is False


@pytest.mark.asyncio
async def test_notifications_in_separate_windows_sync_separately():
    coordinator = CountingCoordinator()
    debouncer = RescheduleDebouncer(coordinator, delay_seconds=0.02)

    debouncer.notify()
    await asyncio.sleep(0.1)
    debouncer.notify()
    await asyncio.sleep(0.1)

    assert coordinator.calls == 2


@pytest.mark.asyncio
async def test_cancel_prevents_pending_sync():
    coordinator = CountingCoordinator()
    debouncer = RescheduleDebouncer(coordinator, delay_seconds=0.05)

    debouncer.notify()
    assert debouncer.cancel() is True
    assert debouncer.cancel() is False
    await asyncio.sleep(0.1)

    assert coordinator.calls == 0


@pytest.mark.asyncio
async def test_notify_during_running_sync_does_not_cancel_it():
    hold = asyncio.Event()
    coordinator = CountingCoordinator(hold=hold)
    debouncer = RescheduleDebouncer(coordinator, delay_seconds=0.02)

    debouncer.notify()
    await asyncio.sleep(0.05)
    assert coordinator.calls == 1

    debouncer.notify()
    hold.set()
    await asyncio.sleep(0.1)

    assert coordinator.calls == 2


@pytest.mark.asyncio
async def test_failed_sync_result_is_discarded():
    class FailingCoordinator:
        async def sync(self):
            raise RuntimeError("remote down")

    debouncer = RescheduleDebouncer(FailingCoordinator(), delay_seconds=0.01)

    debouncer.notify()
    await asyncio.sleep(0.05)

    assert debouncer.pending is False


@pytest.mark.asyncio
async def test_aclose_cancels_pending_timer():
    coordinator = CountingCoordinator()
    debouncer = RescheduleDebouncer(coordinator, delay_seconds=10)

    debouncer.notify()
    await debouncer.aclose()

    assert debouncer.pending is False
    assert coordinator.calls == 0
