"""
Utility modules for the catalog sync service
"""
from .config_loader import CatalogSyncConfig, ShopifySettings, load_sync_config
from .rate_limiter import RateLimiter

__all__ = [
    'CatalogSyncConfig',
    'ShopifySettings',
    'load_sync_config',
    'RateLimiter',
]
