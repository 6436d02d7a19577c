"""FastAPI application bootstrap with router wiring."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_manager.api.routers import health, notifications, products
from product_manager.core.config import Settings, get_settings
from product_manager.services.notifications import NotificationCenter
from product_manager.services.product_manager import ProductManager
from product_manager.storage.blob_store import create_blob_store
from product_manager.storage.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def build_manager(settings: Settings) -> ProductManager:
    """Load the stored product list and wire up the lifecycle controller."""
    store = create_blob_store(settings)
    repository = ProductRepository(store, key=settings.storage_key)
    notifier = NotificationCenter(ttl_seconds=settings.notification_ttl_seconds)
    return ProductManager(repository, notifier)


def create_app(
    settings: Settings | None = None,
    manager: ProductManager | None = None,
) -> FastAPI:
    """Instantiate the FastAPI app and include top-level routers."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title=settings.app_name, version="0.1.0")

    logger.info(
        f"[storage] backend={settings.storage_backend} key={settings.storage_key}"
    )
    app.state.manager = manager or build_manager(settings)
    logger.info(f"[storage] loaded {len(app.state.manager.products)} product(s)")

    cors_origins = settings.cors_origins
    logger.info(f"[CORS] Allowed origins: {cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(products.router, prefix="/api/products", tags=["products"])
    app.include_router(
        notifications.router, prefix="/api/notifications", tags=["notifications"]
    )

    return app


app = create_app()
