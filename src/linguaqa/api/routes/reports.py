"""Report lifecycle endpoints and the LQA score calculator."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from linguaqa.api.deps import get_actor, get_services
from linguaqa.models.notifications import TransitionResult
from linguaqa.models.quality import Actor, LqaError
from linguaqa.quality.scoring import lqa_score_from_errors
from linguaqa.quality.state_machine import Action
from linguaqa.services import QualityServices

router = APIRouter(tags=["reports"])


class CommentBody(BaseModel):
    comment: Optional[str] = None


class LqaScoreBody(BaseModel):
    errors: list[LqaError] = Field(default_factory=list)
    words_reviewed: int = Field(gt=0)


def _response(result: TransitionResult) -> dict[str, Any]:
    return {
        "success": True,
        "report": result.report.to_record(),
        "previous_status": result.previous_status,
        "notifications_requested": len(result.intents),
    }


@router.post("/lqa-score")
def lqa_score(payload: LqaScoreBody, services: QualityServices = Depends(get_services)) -> dict[str, Any]:
    """Score a structured LQA review with the active error weights."""
    weights = services.settings_loader.load().lqa_error_weights
    return {
        "lqa_score": lqa_score_from_errors(payload.errors, payload.words_reviewed, weights),
        "words_reviewed": payload.words_reviewed,
    }


@router.get("/{report_id}")
def get_report(report_id: str, services: QualityServices = Depends(get_services)) -> dict[str, Any]:
    return services.state_machine.load_report(report_id).to_record()


@router.post("/{report_id}/submit")
def submit_for_review(
    report_id: str,
    actor: Actor = Depends(get_actor),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    result = services.state_machine.transition(report_id, Action.SUBMIT_FOR_REVIEW, actor)
    body = _response(result)
    body["deadline"] = body["report"]["review_deadline"]
    return body


@router.post("/{report_id}/accept")
def accept(
    report_id: str,
    actor: Actor = Depends(get_actor),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    return _response(services.state_machine.transition(report_id, Action.ACCEPT, actor))


@router.post("/{report_id}/dispute")
def dispute(
    report_id: str,
    payload: CommentBody,
    actor: Actor = Depends(get_actor),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    return _response(services.state_machine.transition(report_id, Action.DISPUTE, actor, payload.comment))


@router.post("/{report_id}/finalize")
def finalize(
    report_id: str,
    payload: CommentBody,
    actor: Actor = Depends(get_actor),
    services: QualityServices = Depends(get_services),
) -> dict[str, Any]:
    return _response(services.state_machine.transition(report_id, Action.FINALIZE, actor, payload.comment))
