"""
Remote product normalization.

Turns one raw Shopify product record into a ``NormalizedProduct``. The
function is total: missing or malformed fields fall back to configured
defaults instead of raising, so one bad record never aborts a sync.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional

from src.integrations.contracts.catalog import NormalizedProduct
from src.utils.config_loader import CatalogSyncConfig

_TAG_RE = re.compile(r"<[^>]*>")
_NBSP_RE = re.compile(r"&nbsp;", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_CENTS = Decimal("0.01")


def _safe_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def clean_description(html: Any, max_length: int = 300) -> str:
    """Strip markup from ``body_html`` and cap it for the messaging channel."""
    text = _safe_text(html)
    if not text:
        return ""
    text = _TAG_RE.sub("", text)
    text = _NBSP_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text[:max_length]


def parse_price(value: Any) -> Decimal:
    """Parse a remote price string; unusable or negative values become 0.00."""
    if value is None or isinstance(value, bool):
        return Decimal("0.00")
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite() or amount < 0:
            return Decimal("0.00")
        # Amounts beyond the decimal context precision cannot be quantized
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return Decimal("0.00")


def parse_quantity(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    # Oversold variants report negative inventory
    return max(quantity, 0)


def _first_dict(items: Any) -> Dict[str, Any]:
    if not isinstance(items, list):
        return {}
    for item in items:
        if isinstance(item, dict):
            return item
    return {}


def _text_or(value: Any, fallback: str) -> str:
    text = _safe_text(value).strip()
    return text or fallback


def _tags_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_safe_text(tag).strip() for tag in value if tag is not None)
    return _safe_text(value)


def product_url(base_url: str, handle: Any) -> str:
    return f"{base_url.rstrip('/')}/products/{_safe_text(handle).strip()}"


def normalize(raw: Dict[str, Any], config: Optional[CatalogSyncConfig] = None) -> NormalizedProduct:
    """Normalize a single raw product record."""
    cfg = config or CatalogSyncConfig()
    norm = cfg.normalization
    storefront = cfg.storefront
    if not isinstance(raw, dict):
        raw = {}

    variant = _first_dict(raw.get("variants"))
    image = _first_dict(raw.get("images"))

    stock = parse_quantity(variant.get("inventory_quantity"))
    raw_id = raw.get("id")

    return NormalizedProduct(
        id="" if raw_id is None else str(raw_id),
        name=_safe_text(raw.get("title")).strip(),
        description=clean_description(raw.get("body_html"), norm.description_max_length),
        price_amount=parse_price(variant.get("price")),
        currency=storefront.currency,
        currency_symbol=storefront.currency_symbol,
        image_url=_safe_text(image.get("src")),
        availability=norm.in_stock_label if stock > 0 else norm.out_of_stock_label,
        stock=stock,
        sku=_safe_text(variant.get("sku")),
        category=_text_or(raw.get("product_type"), norm.default_category),
        vendor=_text_or(raw.get("vendor"), norm.default_vendor),
        tags=_tags_text(raw.get("tags")),
        url=product_url(storefront.base_url, raw.get("handle")),
    )
