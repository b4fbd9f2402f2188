"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...services.routing.service import get_route_optimizer

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/engine", status_code=status.HTTP_200_OK)
def health_engine() -> dict:
    """Report whether the optimizer and its region catalog could be built."""
    try:
        optimizer = get_route_optimizer()
        return {
            "service": "engine",
            "healthy": True,
            "regions": len(optimizer.catalog),
            "map_order_policy": optimizer.map_order_policy,
        }
    except Exception as e:
        return {"service": "engine", "healthy": False, "error": str(e)}
