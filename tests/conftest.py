"""Pytest fixtures for catalog sync tests."""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from src.database.artifact_store import InMemorySink
from src.integrations.contracts.catalog import FetchResult
from src.utils.config_loader import CatalogSyncConfig


def make_raw_product(**overrides: Any) -> Dict[str, Any]:
    product = {
        "id": 1001,
        "title": "Linen Tote",
        "body_html": "<p>Hand <b>embroidered</b>&nbsp;tote</p>",
        "vendor": "Bastidor Colorido",
        "product_type": "Bags",
        "tags": "linen, tote",
        "handle": "linen-tote",
        "images": [{"src": "https://cdn.example.com/tote.jpg"}],
        "variants": [{"price": "19.90", "inventory_quantity": 3, "sku": "TOTE-1"}],
    }
    product.update(overrides)
    return product


class FakeFetcher:
    """Fetcher returning queued results; ``gate`` holds fetch() open to simulate a slow remote."""

    def __init__(self, results: Optional[List[FetchResult]] = None, credential_configured: bool = True) -> None:
        self.results = list(results or [])
        self.credential_configured = credential_configured
        self.calls = 0
        self.gate: Optional[asyncio.Event] = None

    def queue(self, result: FetchResult) -> None:
        self.results.append(result)

    async def fetch(self) -> FetchResult:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        return self.results.pop(0)


class FailingSink:
    def publish(self, artifacts):
        from src.integrations.contracts.catalog import SinkWriteError

        raise SinkWriteError("disk full")


@pytest.fixture
def raw_product():
    return make_raw_product


@pytest.fixture
def config():
    return CatalogSyncConfig()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def memory_sink():
    return InMemorySink()


@pytest.fixture
def failing_sink():
    return FailingSink()
