"""
Shopify Product Catalogue HTTP Client.

Purpose:
- Fetches the full product list from the Shopify Admin REST API
- Returns raw product records; normalization happens in src/processors

Implementation notes:
- Requests use the maximum page size (250) and follow the cursor pagination
  advertised in the ``Link`` response header
- Transport, HTTP and auth failures are returned as ``FetchResult`` failures
  carrying the remote error body; this client never raises to its caller
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.integrations.contracts.catalog import CatalogFetchError, FetchResult
from src.utils.config_loader import FetchConfig, ShopifySettings
from src.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class ShopifyCatalogFetcher:
    def __init__(
        self,
        settings: ShopifySettings,
        fetch_config: Optional[FetchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        self.settings = settings
        self.fetch_config = fetch_config or FetchConfig()
        self._transport = transport
        self.rate_limiter = rate_limiter or RateLimiter(self.fetch_config.requests_per_minute)

    @property
    def credential_configured(self) -> bool:
        return self.settings.credential_configured

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.settings.access_token or "",
            "Accept": "application/json",
        }

    async def fetch(self) -> FetchResult:
        if not self.settings.credential_configured:
            logger.error("SHOPIFY_TOKEN is not set; cannot fetch products from %s", self.settings.shop)
            return FetchResult.failure("Shopify access token is not configured.")

        logger.info("Fetching products from Shopify shop %s", self.settings.shop)
        try:
            products = await self._fetch_all_pages()
        except CatalogFetchError as e:
            logger.error("Failed to fetch Shopify products: %s (payload=%r)", e, e.payload)
            return FetchResult.failure(str(e), payload=e.payload)

        logger.info("%d products found in Shopify", len(products))
        return FetchResult(success=True, products=products)

    async def _fetch_all_pages(self) -> List[Dict[str, Any]]:
        products: List[Dict[str, Any]] = []
        url: Optional[str] = self.settings.products_url
        params: Optional[Dict[str, Any]] = {"limit": self.fetch_config.page_size}
        pages = 0

        async with httpx.AsyncClient(timeout=self.fetch_config.timeout_seconds, transport=self._transport) as client:
            while url:
                if pages >= self.fetch_config.max_pages:
                    logger.warning(
                        "Stopped paginating after %d pages (%d requests in the last %.0fs); catalog may be truncated",
                        self.fetch_config.max_pages,
                        self.rate_limiter.requests_in_window(),
                        self.rate_limiter.window_seconds,
                    )
                    break
                await self.rate_limiter.wait_if_needed()
                response = await self._get(client, url, params)
                page = self._parse_products(response)
                products.extend(page)
                pages += 1
                logger.debug("Fetched page %d with %d products", pages, len(page))

                # The next-page URL already carries limit and page_info.
                url = response.links.get("next", {}).get("url")
                params = None

        return products

    async def _get(self, client: httpx.AsyncClient, url: str, params: Optional[Dict[str, Any]]) -> httpx.Response:
        try:
            response = await client.get(url, params=params, headers=self._headers())
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            payload = _error_payload(e.response)
            raise CatalogFetchError(
                f"Shopify API returned HTTP {e.response.status_code}", payload=payload
            ) from e
        except httpx.RequestError as e:
            raise CatalogFetchError(f"Could not reach Shopify: {e}") from e

    @staticmethod
    def _parse_products(response: httpx.Response) -> List[Dict[str, Any]]:
        try:
            data = response.json()
        except ValueError as e:
            raise CatalogFetchError("Shopify returned a non-JSON response", payload=response.text) from e

        items = data.get("products") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise CatalogFetchError("Shopify response has no 'products' array", payload=data)
        return [item for item in items if isinstance(item, dict)]


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
