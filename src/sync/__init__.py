"""
Catalog synchronization: the coordinator that owns the snapshot and the
debouncer that turns webhook bursts into a single delayed resync.
"""

from .coordinator import SyncCoordinator
from .debouncer import RescheduleDebouncer

__all__ = ["SyncCoordinator", "RescheduleDebouncer"]
