"""Admin endpoints: deadline sweep and effective quality settings."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from linguaqa.api.deps import get_actor, get_services, require_admin
from linguaqa.models.quality import Actor
from linguaqa.services import QualityServices

router = APIRouter(tags=["admin"])


@router.post("/sweep-deadlines")
def sweep_deadlines(
    actor: Actor = Depends(get_actor),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    """Auto-accept reports whose dispute period has elapsed."""
    require_admin(actor, "sweep_deadlines")
    return services.sweeper.run().model_dump()


@router.get("/settings")
def get_settings(services: QualityServices = Depends(get_services)) -> dict[str, Any]:
    """Return the quality policy currently in force."""
    return services.settings_loader.load().model_dump()
