"""
Configuration loader for the catalog sync service
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "catalog_sync.yml"


class StorefrontConfig(BaseModel):
    """Public storefront and currency settings"""

    base_url: str = "https://bastidorcolorido.pt"
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    currency_symbol: str = "€"


class NormalizationConfig(BaseModel):
    """Defaults applied while normalizing remote product records"""

    description_max_length: int = Field(default=300, ge=1)
    default_category: str = "Geral"
    default_vendor: str = "Bastidor Colorido"
    in_stock_label: str = "in stock"
    out_of_stock_label: str = "out of stock"


class ArtifactsConfig(BaseModel):
    """Names of the files published after every successful sync"""

    catalog_name: str = "Bastidor Colorido - Catálogo"
    tabular: str = "catalogo.csv"
    catalog_document: str = "catalogo.json"
    detail_list: str = "produtos.json"

    def names(self) -> list[str]:
        return [self.tabular, self.catalog_document, self.detail_list]


class FetchConfig(BaseModel):
    """Remote product listing settings"""

    page_size: int = Field(default=250, ge=1, le=250)
    max_pages: int = Field(default=20, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)
    requests_per_minute: int = Field(default=120, ge=0)


class WebhookConfig(BaseModel):
    """Debounce window for webhook-triggered resyncs"""

    debounce_seconds: float = Field(default=300.0, ge=0.0)
    preview_limit: int = Field(default=50, ge=1)


class CatalogSyncConfig(BaseModel):
    """Complete catalog sync configuration"""

    storefront: StorefrontConfig = Field(default_factory=StorefrontConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)


class ShopifySettings(BaseModel):
    """Remote platform identity and credential, read from the environment"""

    shop: str = "bastidor-colorido-2-0"
    access_token: Optional[str] = None
    api_version: str = "2023-10"

    @property
    def credential_configured(self) -> bool:
        return bool(self.access_token)

    @property
    def products_url(self) -> str:
        return f"https://{self.shop}.myshopify.com/admin/api/{self.api_version}/products.json"

    @classmethod
    def from_env(cls) -> "ShopifySettings":
        return cls(
            shop=os.getenv("SHOPIFY_SHOP") or "bastidor-colorido-2-0",
            access_token=os.getenv("SHOPIFY_TOKEN") or None,
            api_version=os.getenv("SHOPIFY_API_VERSION") or "2023-10",
        )


def load_sync_config(config_path: Optional[Path] = None) -> CatalogSyncConfig:
    """
    Load and validate the catalog sync configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to $CATALOG_SYNC_CONFIG,
            then config/catalog_sync.yml

    Returns:
        Validated CatalogSyncConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        env_path = os.getenv("CATALOG_SYNC_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        config = CatalogSyncConfig(**data)
        logger.info("Successfully loaded catalog sync config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Catalog sync config validation failed: %s", e)
        raise
