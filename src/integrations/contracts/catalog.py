"""
Catalog contracts.

Shapes shared by the fetchers, the normalizer, the encoders and the sync
coordinator. Everything here is a plain value object; the only mutable owner
of these values is ``src.sync.coordinator.SyncCoordinator``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SyncErrorCode(str, Enum):
    FETCH_FAILED = "fetch_failed"
    EMPTY_CATALOG = "empty_catalog"
    ALREADY_IN_PROGRESS = "already_in_progress"
    SINK_WRITE_FAILED = "sink_write_failed"
    UNEXPECTED_ERROR = "unexpected_error"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CatalogFetchError(RuntimeError):
    """Raised inside a fetcher when the remote platform cannot be read."""

    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload


class SinkWriteError(RuntimeError):
    """Raised by a sink when an artifact could not be stored."""

    def __init__(self, message: str, *, artifact: Optional[str] = None) -> None:
        super().__init__(message)
        self.artifact = artifact


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NormalizedProduct:
    id: str
    name: str
    description: str
    price_amount: Decimal                # always quantized to 2 places, >= 0
    currency: str
    currency_symbol: str
    image_url: str
    availability: str
    stock: int
    sku: str
    category: str
    vendor: str
    tags: str
    url: str

    @property
    def price(self) -> str:
        return f"{self.currency_symbol}{self.price_amount:.2f}"

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def price_minor_units(self) -> int:
        return int((self.price_amount * 100).to_integral_value())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "currency": self.currency,
            "image_url": self.image_url,
            "availability": self.availability,
            "stock": self.stock,
            "sku": self.sku,
            "category": self.category,
            "vendor": self.vendor,
            "tags": self.tags,
            "url": self.url,
        }


@dataclass(frozen=True)
class CatalogSnapshot:
    products: Tuple[NormalizedProduct, ...] = ()
    produced_at: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self.products)


@dataclass(frozen=True)
class SyncState:
    in_flight: bool = False
    last_sync: Optional[datetime] = None
    last_error: Optional[str] = None
    last_error_code: Optional[SyncErrorCode] = None
    credential_configured: bool = False


@dataclass(frozen=True)
class SyncStatusView:
    """Read-only view returned by ``SyncCoordinator.status()``."""
    state: SyncState
    products_count: int

    def to_dict(self) -> Dict[str, Any]:
        last_sync = self.state.last_sync
        return {
            "products_count": self.products_count,
            "last_sync": last_sync.isoformat() if last_sync else None,
            "shopify_connected": self.state.credential_configured,
            "syncing": self.state.in_flight,
            "last_error": self.state.last_error,
        }


@dataclass
class FetchResult:
    success: bool
    products: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    payload: Optional[Any] = None        # remote error body, when there is one

    @classmethod
    def failure(cls, error: str, payload: Optional[Any] = None) -> "FetchResult":
        return cls(success=False, error=error, payload=payload)


@dataclass
class SyncResult:
    success: bool
    count: Optional[int] = None
    files: List[str] = field(default_factory=list)
    error: Optional[str] = None
    error_code: Optional[SyncErrorCode] = None

    @classmethod
    def failed(cls, code: SyncErrorCode, error: str) -> "SyncResult":
        return cls(success=False, error=error, error_code=code)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "count": self.count, "files": list(self.files)}
        return {
            "success": False,
            "error": self.error,
            "error_code": self.error_code.value if self.error_code else None,
        }
