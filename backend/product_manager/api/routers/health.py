"""Simple health and readiness endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from product_manager.api.dependencies.manager import get_manager
from product_manager.services.product_manager import ProductManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", summary="Liveness check")
async def live() -> dict[str, str]:
    """Indicates API process is running."""
    return {"status": "ok", "service": "product-manager-api"}


@router.get("/ready", summary="Readiness check")
async def ready(
    manager: ProductManager = Depends(get_manager),
) -> dict[str, Any]:
    """Check that the snapshot store is reachable.

    Returns 503 when the store cannot be reached, so writes would fail.
    """
    checks: dict[str, Any] = {
        "status": "ok",
        "service": "product-manager-api",
        "checks": {},
    }

    try:
        healthy = manager.repository.store.ping()
    except Exception as e:
        logger.error(f"Unexpected error in storage health check: {e}", exc_info=True)
        healthy = False

    checks["checks"]["storage"] = {
        "status": "healthy" if healthy else "unhealthy",
        "message": (
            "Snapshot store reachable" if healthy else "Snapshot store unavailable"
        ),
        "products": len(manager.products),
    }

    if not healthy:
        checks["status"] = "unhealthy"
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=checks,
        )

    return checks
