"""
Catalog encoders.

Pure transforms from a sequence of ``NormalizedProduct`` into the artifacts
published after a sync:

- tabular CSV for the WhatsApp Business "import products" screen
- catalog document JSON (WhatsApp Business / Commerce Manager shape)
- detail list JSON for human review

Output is byte-stable for identical input.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

from src.integrations.contracts.catalog import NormalizedProduct
from src.utils.config_loader import CatalogSyncConfig

TABULAR_HEADERS: List[str] = [
    "ID",
    "Name",
    "Description",
    "Price",
    "Currency",
    "Image",
    "Availability",
    "Stock",
    "SKU",
    "Category",
    "Brand",
    "Tags",
    "URL",
]

DOCUMENT_IN_STOCK = "in stock"
DOCUMENT_OUT_OF_STOCK = "out of stock"
DOCUMENT_CONDITION = "new"


def _tabular_row(product: NormalizedProduct) -> List[Any]:
    return [
        product.id,
        product.name,
        product.description,
        product.price,
        product.currency,
        product.image_url,
        product.availability,
        product.stock,
        product.sku,
        product.category,
        product.vendor,
        product.tags,
        product.url,
    ]


def encode_tabular(products: Iterable[NormalizedProduct]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=",", quotechar='"', quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(TABULAR_HEADERS)
    for product in products:
        writer.writerow(_tabular_row(product))
    return buffer.getvalue()


def decode_tabular(text: str) -> List[Dict[str, str]]:
    """Parse ``encode_tabular`` output back into header-keyed rows."""
    reader = csv.DictReader(io.StringIO(text, newline=""))
    return [dict(row) for row in reader]


def encode_catalog_document(products: Iterable[NormalizedProduct], catalog_name: str) -> Dict[str, Any]:
    return {
        "catalog_name": catalog_name,
        "products": [
            {
                "retailer_id": str(product.id),
                "name": product.name,
                "description": product.description,
                "price": product.price_minor_units,
                "currency": product.currency,
                "image_url": product.image_url,
                "availability": DOCUMENT_IN_STOCK if product.in_stock else DOCUMENT_OUT_OF_STOCK,
                "condition": DOCUMENT_CONDITION,
                "brand": product.vendor,
                "category": product.category,
                "url": product.url,
            }
            for product in products
        ],
    }


def encode_detail_list(products: Iterable[NormalizedProduct]) -> List[Dict[str, Any]]:
    return [product.to_dict() for product in products]


def dump_json(obj: Any) -> bytes:
    return json.dumps(obj, indent=2, ensure_ascii=False).encode("utf-8")


def build_artifacts(
    products: Sequence[NormalizedProduct],
    config: Optional[CatalogSyncConfig] = None,
) -> Dict[str, bytes]:
    """Encode every artifact, keyed by its published file name."""
    artifacts_cfg = (config or CatalogSyncConfig()).artifacts
    return {
        artifacts_cfg.tabular: encode_tabular(products).encode("utf-8"),
        artifacts_cfg.catalog_document: dump_json(encode_catalog_document(products, artifacts_cfg.catalog_name)),
        artifacts_cfg.detail_list: dump_json(encode_detail_list(products)),
    }
