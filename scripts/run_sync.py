#!/usr/bin/env python3
"""
Run a single catalog sync from the command line
"""
import sys
import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.database.artifact_store import LocalDirectorySink
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogFetcher
from src.integrations.clients.real_http.shopify_products import ShopifyCatalogFetcher
from src.sync.coordinator import SyncCoordinator
from src.utils.config_loader import ShopifySettings, load_sync_config


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def main():
    """Main entry point for a one-off sync"""
    parser = argparse.ArgumentParser(
        description='Mirror the Shopify catalog into WhatsApp Business import files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sync from Shopify using SHOPIFY_TOKEN from .env
  python scripts/run_sync.py

  # Sync from a local products.json export instead of Shopify
  python scripts/run_sync.py --local-file data/sample_products.json

  # Write the artifacts somewhere else
  python scripts/run_sync.py --output-dir /tmp/catalog
        """
    )
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to sync config YAML file (default: config/catalog_sync.yml)')
    parser.add_argument('--output-dir', type=Path, default=None,
                        help='Directory for the published files (default: $CATALOG_OUTPUT_DIR or public)')
    parser.add_argument('--local-file', type=Path, default=None,
                        help='Read raw products from a local JSON file instead of Shopify')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-file', type=Path, default=None, help='Also write logs to this file')
    args = parser.parse_args()

    load_dotenv()
    setup_logging(args.verbose, args.log_file)
    logger = logging.getLogger("run_sync")

    try:
        config = load_sync_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load config: {e}")
        return 1

    if args.local_file:
        fetcher = LocalCatalogFetcher(args.local_file)
    else:
        fetcher = ShopifyCatalogFetcher(ShopifySettings.from_env(), fetch_config=config.fetch)

    output_dir = args.output_dir or Path(os.getenv("CATALOG_OUTPUT_DIR", "public"))
    coordinator = SyncCoordinator(fetcher, LocalDirectorySink(output_dir), config=config)

    result = asyncio.run(coordinator.sync())
    if not result.success:
        logger.error(f"Sync failed: {result.error}")
        return 1

    logger.info(f"Synced {result.count} products into {output_dir}: {', '.join(result.files)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
