"""
Integrations layer.
This package contains all code used to communicate with external systems:
- Shopify Admin API (authoritative product catalog)
- Local catalog exports used during development

Key rule:
- The sync pipeline MUST NOT call Shopify directly.
- It calls a fetcher client (under src/integrations/clients) and receives a FetchResult.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/main.py).
"""

from .contracts.catalog import (
    CatalogFetchError,
    CatalogSnapshot,
    FetchResult,
    NormalizedProduct,
    SinkWriteError,
    SyncErrorCode,
    SyncResult,
    SyncState,
    SyncStatusView,
)

__all__ = [
    "CatalogFetchError", "CatalogSnapshot", "FetchResult", "NormalizedProduct",
    "SinkWriteError", "SyncErrorCode", "SyncResult", "SyncState", "SyncStatusView",
]
