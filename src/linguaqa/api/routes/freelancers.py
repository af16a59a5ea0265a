"""Freelancer score summary and escalation check endpoints."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from linguaqa.api.deps import get_actor, get_services, require_admin
from linguaqa.core.exceptions import NotFoundError
from linguaqa.models.quality import FREELANCER_ENTITY, REPORT_ENTITY, Actor, QualityReport
from linguaqa.quality.scoring import ScoreAggregator, value_index
from linguaqa.services import QualityServices

router = APIRouter(tags=["freelancers"])


@router.get("/{freelancer_id}/scores")
def scores(
    freelancer_id: str,
    rate: Optional[float] = Query(default=None, gt=0, description="Per-word rate for the value index"),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    """Average LQA, average QS and combined score over eligible reports."""
    if services.store.get(FREELANCER_ENTITY, freelancer_id) is None:
        raise NotFoundError(FREELANCER_ENTITY, freelancer_id)
    reports = [
        QualityReport.model_validate(r)
        for r in services.store.filter(REPORT_ENTITY, freelancer_id=freelancer_id)
    ]
    summary = ScoreAggregator.compute(reports, services.settings_loader.load())
    return {
        "freelancer_id": freelancer_id,
        **summary.model_dump(),
        "value_index": value_index(summary.combined, rate),
    }


@router.post("/{freelancer_id}/check")
def check_and_notify(
    freelancer_id: str,
    actor: Actor = Depends(get_actor),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    require_admin(actor, "check_and_notify")
    outcome = services.escalation.check_and_notify(freelancer_id)
    return {
        "success": True,
        "notifications_sent": len(outcome.events),
        "notifications": [e.model_dump(mode="json") for e in outcome.events],
    }
