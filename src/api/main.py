"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from src.api.endpoints.webhooks import router as webhooks_router
from src.database.artifact_store import LocalDirectorySink
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogFetcher
from src.integrations.clients.real_http.shopify_products import ShopifyCatalogFetcher
from src.sync.coordinator import ArtifactSink, SyncCoordinator
from src.sync.debouncer import RescheduleDebouncer
from src.utils.config_loader import CatalogSyncConfig, ShopifySettings, load_sync_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Catalog Mirror API"
SERVICE_VERSION = "1.0.0"


# ============================================================================
# DEPENDENCY WIRING
# ============================================================================

def _should_use_real_integrations() -> bool:
    mode = os.getenv("INTEGRATIONS_MODE", "").strip().lower()
    if mode in {"mock", "test", "local"}:
        return False
    return True


def build_coordinator(
    config: CatalogSyncConfig,
    sink: Optional[ArtifactSink] = None,
    settings: Optional[ShopifySettings] = None,
) -> SyncCoordinator:
    """Select the fetcher (real Shopify vs local file) in ONE place."""
    if _should_use_real_integrations():
        settings = settings or ShopifySettings.from_env()
        fetcher = ShopifyCatalogFetcher(settings, fetch_config=config.fetch)
        logger.info("Using Shopify catalogue client for shop %s", settings.shop)
    else:
        fetcher = LocalCatalogFetcher(os.getenv("LOCAL_CATALOG_PATH"))
        logger.info("Using local catalogue client (%s)", fetcher.path)

    if sink is None:
        sink = LocalDirectorySink(os.getenv("CATALOG_OUTPUT_DIR", "public"))
    return SyncCoordinator(fetcher, sink, config=config)


def create_app(
    coordinator: Optional[SyncCoordinator] = None,
    debouncer: Optional[RescheduleDebouncer] = None,
    config: Optional[CatalogSyncConfig] = None,
) -> FastAPI:
    config = config or (coordinator.config if coordinator else load_sync_config())
    coordinator = coordinator or build_coordinator(config)
    debouncer = debouncer or RescheduleDebouncer(coordinator, delay_seconds=config.webhook.debounce_seconds)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        status = coordinator.status()
        logger.info("Starting %s", SERVICE_NAME)
        logger.info("Shopify credential configured: %s", status.state.credential_configured)
        logger.info("Webhook resync debounce window: %.0fs", debouncer.delay_seconds)
        yield
        # Cancel any pending webhook resync on shutdown
        logger.info("Shutting down %s...", SERVICE_NAME)
        await debouncer.aclose()

    application = FastAPI(
        title=SERVICE_NAME,
        description="Mirrors the Shopify product catalog into WhatsApp Business import files",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.config = config
    application.state.coordinator = coordinator
    application.state.debouncer = debouncer

    _register_routes(application)
    application.include_router(webhooks_router)

    return application


# ============================================================================
# ENDPOINTS
# ============================================================================

def _register_routes(application: FastAPI) -> None:

    @application.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return {"service": SERVICE_NAME, "status": "healthy", "version": SERVICE_VERSION, "timestamp": datetime.now().isoformat()}

    @application.get("/health", tags=["Health"])
    async def health_check(request: Request):
        status = request.app.state.coordinator.status()
        return {
            "status": "healthy",
            "syncing": status.state.in_flight,
            "resync_pending": request.app.state.debouncer.pending,
            "timestamp": datetime.now().isoformat(),
        }

    @application.post("/api/sync", tags=["Sync"])
    async def api_sync(request: Request):
        logger.info("Manual sync requested")
        result = await request.app.state.coordinator.sync()
        return result.to_dict()

    @application.get("/api/status", tags=["Sync"])
    async def api_status(request: Request):
        return request.app.state.coordinator.status().to_dict()

    @application.get("/api/products", tags=["Products"])
    async def api_products(request: Request):
        limit = request.app.state.config.webhook.preview_limit
        return request.app.state.coordinator.preview(limit)

    @application.get("/downloads/{artifact_name}", tags=["Downloads"])
    async def download_artifact(artifact_name: str, request: Request):
        config: CatalogSyncConfig = request.app.state.config
        if artifact_name not in config.artifacts.names():
            raise HTTPException(status_code=404, detail=f"Unknown artifact: {artifact_name}")

        path_for = getattr(request.app.state.coordinator.sink, "path_for", None)
        path: Optional[Path] = path_for(artifact_name) if path_for else None
        if path is None:
            raise HTTPException(status_code=404, detail=f"{artifact_name} has not been generated yet. Run a sync first.")
        return FileResponse(path, filename=artifact_name)


app = create_app()
