"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/storage", status_code=status.HTTP_200_OK)
def health_storage() -> dict:
    """Report whether the map data directory is usable."""
    maps_root = settings.data_root / "maps"
    return {
        "data_root": str(settings.data_root),
        "maps_directory_exists": maps_root.is_dir(),
        "map_count": len(list(maps_root.glob("*.json"))) if maps_root.is_dir() else 0,
    }
