"""Notification intents, escalation events and operation outcomes."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from linguaqa.models.quality import QualityReport


class NotificationIntent(BaseModel):
    """A message a workflow step wants delivered. Sent after the step commits."""

    to: str
    subject: str
    body: str


class EscalationType(StrEnum):
    FREELANCER_WARNING = "freelancer_warning"
    CONSECUTIVE_LOW_LQA = "consecutive_low_lqa"


class EscalationEvent(BaseModel):
    """A freelancer's quality trend crossed a policy threshold."""

    type: EscalationType
    freelancer_id: str
    freelancer_name: str = ""
    score: Optional[float] = None  # combined score (freelancer_warning)
    scores: list[float] = Field(default_factory=list)  # recent LQA scores (consecutive_low_lqa)


class EscalationOutcome(BaseModel):
    """Events raised by one escalation check plus the intents they produced."""

    freelancer_id: str
    eligible_reports: int = 0
    events: list[EscalationEvent] = Field(default_factory=list)
    intents: list[NotificationIntent] = Field(default_factory=list)


class TransitionResult(BaseModel):
    """Committed report state plus the notifications the transition requested."""

    report: QualityReport
    previous_status: str
    intents: list[NotificationIntent] = Field(default_factory=list)


class DispatchReport(BaseModel):
    """Best-effort delivery tally."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0


class SweepReport(BaseModel):
    """Result of one deadline sweep."""

    examined: int = 0
    auto_accepted: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    enabled: bool = True
