"""
Local Product Catalogue Client (Mock/Local).

Purpose:
- Acts as a development-time product source when no Shopify token is available.
- Loads raw Shopify-shaped product records from a local JSON file
  (either ``{"products": [...]}`` as returned by products.json, or a bare list).

Swap:
Selected in src/api/main.py when INTEGRATIONS_MODE=mock; otherwise the real
clients/real_http/shopify_products.py client is used.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from src.integrations.contracts.catalog import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_PATH = Path(__file__).resolve().parents[4] / "data" / "sample_products.json"


class LocalCatalogFetcher:
    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path else DEFAULT_FIXTURE_PATH

    @property
    def credential_configured(self) -> bool:
        return True

    async def fetch(self) -> FetchResult:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.error("Local catalogue file not found: %s", self.path)
            return FetchResult.failure(f"Local catalogue file not found: {self.path}")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load local catalogue %s: %s", self.path, e)
            return FetchResult.failure(f"Local catalogue is unreadable: {e}")

        items = raw.get("products") if isinstance(raw, dict) else raw
        if not isinstance(items, list):
            return FetchResult.failure("Local catalogue must contain a 'products' array", payload=raw)

        products = [item for item in items if isinstance(item, dict)]
        logger.info("[MOCK] Loaded %d products from %s", len(products), self.path)
        return FetchResult(success=True, products=products)
