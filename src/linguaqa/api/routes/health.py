"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from linguaqa.api.deps import get_services
from linguaqa.services import QualityServices

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
def ready(services: QualityServices = Depends(get_services)) -> dict[str, str]:
    # Settings load touches the store (and cache when configured)
    services.settings_loader.load()
    return {"status": "ready"}
