"""
Catalog sync coordinator.

Owns the current ``CatalogSnapshot`` and ``SyncState`` and runs the
fetch -> normalize -> encode -> publish pipeline. At most one sync runs at a
time; a second call made while one is in flight returns
``ALREADY_IN_PROGRESS`` without touching anything.

Snapshot and state are immutable values replaced by reference, so
``status()`` and ``preview()`` always see a complete previous or complete new
view, never a mix.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol

from src.integrations.contracts.catalog import (
    CatalogSnapshot,
    FetchResult,
    SinkWriteError,
    SyncErrorCode,
    SyncResult,
    SyncState,
    SyncStatusView,
)
from src.processors.encoders import build_artifacts
from src.processors.product_normalizer import normalize
from src.utils.config_loader import CatalogSyncConfig

logger = logging.getLogger(__name__)


class CatalogFetcher(Protocol):
    credential_configured: bool

    async def fetch(self) -> FetchResult:
        ...


class ArtifactSink(Protocol):
    def publish(self, artifacts: Dict[str, bytes]) -> List[str]:
        ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncCoordinator:
    def __init__(
        self,
        fetcher: CatalogFetcher,
        sink: ArtifactSink,
        config: Optional[CatalogSyncConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.sink = sink
        self.config = config or CatalogSyncConfig()
        self._clock = clock or _utcnow
        self._snapshot = CatalogSnapshot()
        self._state = SyncState(credential_configured=bool(getattr(fetcher, "credential_configured", False)))

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def is_syncing(self) -> bool:
        return self._state.in_flight

    async def sync(self) -> SyncResult:
        # No await between the check and the set: under asyncio this is one
        # indivisible transition from IDLE to SYNCING.
        if self._state.in_flight:
            logger.info("Sync requested while another sync is running; skipping")
            return SyncResult.failed(SyncErrorCode.ALREADY_IN_PROGRESS, "A catalog sync is already in progress.")
        self._state = replace(self._state, in_flight=True)

        logger.info("Starting catalog sync")
        try:
            result = await self._run()
        except Exception as e:
            logger.exception("Unexpected error during catalog sync")
            result = SyncResult.failed(SyncErrorCode.UNEXPECTED_ERROR, f"Unexpected sync error: {e}")
        finally:
            if self._state.in_flight:
                self._state = replace(self._state, in_flight=False)

        if not result.success:
            logger.warning("Catalog sync failed (%s): %s", result.error_code.value, result.error)
            self._state = replace(self._state, last_error=result.error, last_error_code=result.error_code)
        return result

    async def _run(self) -> SyncResult:
        fetched = await self.fetcher.fetch()
        if not fetched.success:
            return SyncResult.failed(SyncErrorCode.FETCH_FAILED, fetched.error or "Failed to fetch products.")
        if not fetched.products:
            return SyncResult.failed(SyncErrorCode.EMPTY_CATALOG, "No products found in the remote catalog.")

        products = tuple(normalize(raw, self.config) for raw in fetched.products)
        artifacts = build_artifacts(products, self.config)

        try:
            files = await asyncio.to_thread(self.sink.publish, artifacts)
        except SinkWriteError as e:
            return SyncResult.failed(SyncErrorCode.SINK_WRITE_FAILED, str(e))

        produced_at = self._clock()
        self._snapshot = CatalogSnapshot(products=products, produced_at=produced_at)
        self._state = replace(
            self._state,
            in_flight=False,
            last_sync=produced_at,
            last_error=None,
            last_error_code=None,
        )
        logger.info("Catalog sync finished: %d products, files=%s", len(products), files)
        return SyncResult(success=True, count=len(products), files=list(files))

    def status(self) -> SyncStatusView:
        return SyncStatusView(state=self._state, products_count=len(self._snapshot))

    def preview(self, limit: int = 50) -> Dict[str, Any]:
        snapshot = self._snapshot
        return {
            "products": [product.to_dict() for product in snapshot.products[:limit]],
            "total": len(snapshot),
            "last_sync": snapshot.produced_at.isoformat() if snapshot.produced_at else None,
        }
