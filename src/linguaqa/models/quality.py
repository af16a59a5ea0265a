"""Quality report, policy settings, and party models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from linguaqa.core.config import QualityDefaults

# Entity names as known to the record store
REPORT_ENTITY = "QualityReport"
FREELANCER_ENTITY = "Freelancer"
SETTINGS_ENTITY = "QualitySettings"
USER_ENTITY = "User"
AUDIT_ENTITY = "AdminAuditLog"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportStatus(StrEnum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    PENDING_TRANSLATOR_REVIEW = "pending_translator_review"
    TRANSLATOR_ACCEPTED = "translator_accepted"
    TRANSLATOR_DISPUTED = "translator_disputed"
    PENDING_FINAL_REVIEW = "pending_final_review"
    FINALIZED = "finalized"


# Only these statuses are trusted for scoring
ELIGIBLE_STATUSES = frozenset({ReportStatus.FINALIZED, ReportStatus.TRANSLATOR_ACCEPTED})


class ReportType(StrEnum):
    LQA = "LQA"
    QS = "QS"
    COMBINED = "Combined"


class Severity(StrEnum):
    CRITICAL = "Critical"
    MAJOR = "Major"
    MINOR = "Minor"
    PREFERENTIAL = "Preferential"


class Role(StrEnum):
    ADMIN = "admin"
    PROJECT_MANAGER = "project_manager"
    TRANSLATOR = "translator"
    SYSTEM = "system"  # scheduled jobs, never a human caller


MANAGER_ROLES = frozenset({Role.ADMIN, Role.PROJECT_MANAGER})


class LqaError(BaseModel):
    """One error category found during a structured LQA review."""

    error_type: str
    severity: Severity
    count: int = Field(default=1, ge=1)


class QualityReport(BaseModel):
    """A single LQA / QS assessment of a freelancer's delivery."""

    id: str
    freelancer_id: str
    project_name: str = ""
    report_type: ReportType = ReportType.LQA
    lqa_score: Optional[float] = Field(default=None, ge=0, le=100)
    qs_score: Optional[float] = Field(default=None, ge=0, le=5)
    lqa_errors: list[LqaError] = Field(default_factory=list)
    lqa_words_reviewed: Optional[int] = Field(default=None, gt=0)
    status: ReportStatus = ReportStatus.DRAFT
    reviewer_id: str = ""
    reviewer_comments: str = ""
    translator_comments: str = ""
    submission_date: Optional[datetime] = None
    review_deadline: Optional[datetime] = None
    finalization_date: Optional[datetime] = None
    final_reviewer_comments: str = ""
    auto_accepted: bool = False
    version: int = 0
    created_date: Optional[datetime] = None  # unset on legacy records

    @field_validator("submission_date", "review_deadline", "finalization_date", "created_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_eligible(self) -> bool:
        return self.status in ELIGIBLE_STATUSES

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


_DEFAULT_ERROR_WEIGHTS = {
    Severity.CRITICAL: 10.0,
    Severity.MAJOR: 5.0,
    Severity.MINOR: 2.0,
    Severity.PREFERENTIAL: 0.5,
}


class QualitySettings(BaseModel):
    """Active quality policy. Read-only at evaluation time."""

    dispute_period_days: int = Field(default=7, gt=0)
    probation_threshold: float = Field(default=70, ge=0, le=100)
    lqa_weight: float = Field(default=4, gt=0)
    qs_multiplier: float = Field(default=20, gt=0)
    auto_accept_enabled: bool = True
    lqa_error_weights: dict[str, float] = Field(
        default_factory=lambda: {str(k): v for k, v in _DEFAULT_ERROR_WEIGHTS.items()}
    )

    @field_validator("lqa_error_weights")
    @classmethod
    def _fill_missing_weights(cls, value: dict[str, float]) -> dict[str, float]:
        merged = {str(k): v for k, v in _DEFAULT_ERROR_WEIGHTS.items()}
        merged.update(value)
        return merged

    @classmethod
    def from_defaults(cls, defaults: QualityDefaults) -> QualitySettings:
        return cls(
            dispute_period_days=defaults.dispute_period_days,
            probation_threshold=defaults.probation_threshold,
            lqa_weight=defaults.lqa_weight,
            qs_multiplier=defaults.qs_multiplier,
            auto_accept_enabled=defaults.auto_accept_enabled,
        )

    @classmethod
    def from_record(cls, record: dict[str, Any] | None, defaults: QualityDefaults) -> QualitySettings:
        """Overlay a stored record onto the configured defaults.

        Unknown keys and ``None`` values in the record are ignored so that a
        partially filled settings row still produces a complete policy.
        """
        base = cls.from_defaults(defaults).model_dump()
        if record:
            base.update({k: v for k, v in record.items() if k in base and v is not None})
        return cls.model_validate(base)


class Freelancer(BaseModel):
    """Freelancer as seen by this service (read-only)."""

    id: str
    full_name: str = ""
    email: str = ""
    status: str = ""


class User(BaseModel):
    """Internal staff user: recipient of dispute and escalation notices."""

    id: str
    email: str = ""
    full_name: str = ""
    role: Role = Role.TRANSLATOR


class Actor(BaseModel):
    """Caller of an operation, as asserted by the authenticating gateway."""

    id: str
    email: str = ""
    role: Role


SYSTEM_ACTOR = Actor(id="system", email="", role=Role.SYSTEM)


class AuditEntry(BaseModel):
    """Admin audit trail entry for a report action."""

    actor_id: str
    actor_email: str = ""
    action_type: str
    target_entity: str = REPORT_ENTITY
    target_id: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_date: datetime = Field(default_factory=utcnow)
