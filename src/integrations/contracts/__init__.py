"""
Contracts (data models).

This folder defines the shapes shared by the catalog pipeline:
- FetchResult returned by every fetcher client
- NormalizedProduct / CatalogSnapshot produced by normalization
- SyncState / SyncResult owned and returned by the sync coordinator

Both mock and real fetcher clients return these contracts.
"""
