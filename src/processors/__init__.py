"""
Processors package.

Processing turns raw Shopify product records into normalized products and
encodes them into the published catalog files.
"""

from .encoders import build_artifacts, decode_tabular, encode_catalog_document, encode_detail_list, encode_tabular
from .product_normalizer import clean_description, normalize

__all__ = [
    "build_artifacts",
    "clean_description",
    "decode_tabular",
    "encode_catalog_document",
    "encode_detail_list",
    "encode_tabular",
    "normalize",
]
