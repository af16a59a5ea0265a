"""ReportStateMachine: guarded review/dispute lifecycle of a QualityReport.

Every legal move lives in ``TRANSITIONS``. A transition reads everything it
needs, checks its guards, commits with a conditional update keyed on the
status and version it observed, and only then hands its notification intents
to the dispatcher. A failed guard or lost race leaves the record untouched.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any, Callable, Optional

from linguaqa.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from linguaqa.core.protocols import IEntityStore
from linguaqa.models.notifications import NotificationIntent, TransitionResult
from linguaqa.models.quality import (
    FREELANCER_ENTITY,
    MANAGER_ROLES,
    REPORT_ENTITY,
    USER_ENTITY,
    Actor,
    Freelancer,
    QualityReport,
    QualitySettings,
    ReportStatus,
    Role,
    User,
    utcnow,
)
from linguaqa.notifications.dispatcher import NotificationDispatcher
from linguaqa.quality import templates
from linguaqa.quality.audit import AuditLogger
from linguaqa.quality.scoring import lqa_score_from_errors
from linguaqa.quality.settings import SettingsLoader

logger = logging.getLogger(__name__)


class Action(StrEnum):
    SUBMIT_FOR_REVIEW = "submit_for_review"
    ACCEPT = "accept"
    DISPUTE = "dispute"
    FINALIZE = "finalize"
    AUTO_ACCEPT = "auto_accept"


S = ReportStatus

TRANSITIONS: dict[tuple[ReportStatus, Action], ReportStatus] = {
    (S.DRAFT, Action.SUBMIT_FOR_REVIEW): S.PENDING_TRANSLATOR_REVIEW,
    (S.SUBMITTED, Action.SUBMIT_FOR_REVIEW): S.PENDING_TRANSLATOR_REVIEW,
    (S.PENDING_TRANSLATOR_REVIEW, Action.ACCEPT): S.TRANSLATOR_ACCEPTED,
    (S.PENDING_TRANSLATOR_REVIEW, Action.DISPUTE): S.TRANSLATOR_DISPUTED,
    (S.PENDING_TRANSLATOR_REVIEW, Action.AUTO_ACCEPT): S.TRANSLATOR_ACCEPTED,
    (S.TRANSLATOR_DISPUTED, Action.FINALIZE): S.FINALIZED,
    (S.PENDING_FINAL_REVIEW, Action.FINALIZE): S.FINALIZED,
}

# Actions restricted to a set of caller roles; others are open to any caller
ROLE_GUARDS: dict[Action, frozenset[Role]] = {
    Action.SUBMIT_FOR_REVIEW: MANAGER_ROLES,
    Action.FINALIZE: MANAGER_ROLES,
    Action.AUTO_ACCEPT: frozenset({Role.SYSTEM}),
}

AUDIT_ACTIONS: dict[Action, str] = {
    Action.SUBMIT_FOR_REVIEW: "QUALITY_REPORT_SUBMITTED",
    Action.ACCEPT: "QUALITY_REPORT_ACCEPTED",
    Action.DISPUTE: "QUALITY_REPORT_DISPUTED",
    Action.FINALIZE: "QUALITY_REPORT_FINALIZED",
    Action.AUTO_ACCEPT: "QUALITY_REPORT_AUTO_ACCEPTED",
}


def next_status(status: ReportStatus, action: Action) -> Optional[ReportStatus]:
    """Target status for ``action`` from ``status``, or None if illegal."""
    return TRANSITIONS.get((status, action))


def plan_transition(
    report: QualityReport,
    action: Action,
    actor: Actor,
    settings: QualitySettings,
    now: datetime,
    comment: Optional[str] = None,
) -> dict[str, Any]:
    """Check guards and return the field updates the transition makes.

    Raises:
        PermissionDeniedError: caller role may not perform ``action``.
        ValidationError: dispute without a non-blank comment, or auto-accept
            before the review deadline.
        InvalidStateError: ``action`` is not legal from the current status.
    """
    allowed = ROLE_GUARDS.get(action)
    if allowed is not None and actor.role not in allowed:
        raise PermissionDeniedError(action, actor.role)

    if action is Action.DISPUTE and not (comment or "").strip():
        raise ValidationError("Translator comments are required when disputing a report")

    target = next_status(report.status, action)
    if target is None:
        raise InvalidStateError(report.id, report.status, action)

    updates: dict[str, Any] = {"status": target}
    if action is Action.SUBMIT_FOR_REVIEW:
        updates["submission_date"] = now
        updates["review_deadline"] = now + timedelta(days=settings.dispute_period_days)
        if report.lqa_score is None:
            derived = lqa_score_from_errors(report.lqa_errors, report.lqa_words_reviewed, settings.lqa_error_weights)
            if derived is not None:
                updates["lqa_score"] = derived
    elif action is Action.ACCEPT:
        updates["finalization_date"] = now
    elif action is Action.DISPUTE:
        updates["translator_comments"] = comment
    elif action is Action.FINALIZE:
        updates["final_reviewer_comments"] = comment or ""
        updates["finalization_date"] = now
    elif action is Action.AUTO_ACCEPT:
        if report.review_deadline is None or report.review_deadline > now:
            raise ValidationError(f"Report {report.id} review deadline has not elapsed")
        updates["finalization_date"] = now
        updates["auto_accepted"] = True
    return updates


class ReportStateMachine:
    """Owns QualityReport.status; the only writer of report records."""

    def __init__(
        self,
        *,
        store: IEntityStore,
        settings_loader: SettingsLoader,
        dispatcher: NotificationDispatcher | None = None,
        audit: AuditLogger | None = None,
        app_url: str = "",
        signature: str = templates.DEFAULT_SIGNATURE,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._settings = settings_loader
        self._dispatcher = dispatcher
        self._audit = audit
        self._app_url = app_url
        self._signature = signature
        self._clock = clock

    # ---- public operations ----

    def submit_for_review(self, report_id: str, actor: Actor) -> TransitionResult:
        return self.transition(report_id, Action.SUBMIT_FOR_REVIEW, actor)

    def accept(self, report_id: str, actor: Actor) -> TransitionResult:
        return self.transition(report_id, Action.ACCEPT, actor)

    def dispute(self, report_id: str, actor: Actor, comment: str) -> TransitionResult:
        return self.transition(report_id, Action.DISPUTE, actor, comment)

    def finalize(self, report_id: str, actor: Actor, comment: str = "") -> TransitionResult:
        return self.transition(report_id, Action.FINALIZE, actor, comment)

    def auto_accept(self, report_id: str, actor: Actor) -> TransitionResult:
        return self.transition(report_id, Action.AUTO_ACCEPT, actor)

    def transition(
        self,
        report_id: str,
        action: Action | str,
        actor: Actor,
        comment: Optional[str] = None,
    ) -> TransitionResult:
        try:
            action = Action(action)
        except ValueError as exc:
            raise ValidationError(f"Unknown action {action!r}") from exc
        report = self.load_report(report_id)
        settings = self._settings.load()
        now = self._clock()

        updates = plan_transition(report, action, actor, settings, now, comment)
        planned = report.model_copy(update=updates)
        intents = self._build_intents(action, planned, settings, comment)

        committed = self._commit(report, planned, updates)
        logger.info(
            "Report %s: %s -> %s (%s by %s)",
            report.id, report.status, committed.status, action, actor.id,
        )

        if self._audit is not None:
            self._audit.record(
                actor, AUDIT_ACTIONS[action], committed,
                {"old_status": str(report.status), "new_status": str(committed.status), "comments": comment},
            )
        if self._dispatcher is not None and intents:
            self._dispatcher.dispatch(intents)

        return TransitionResult(report=committed, previous_status=report.status, intents=intents)

    def load_report(self, report_id: str) -> QualityReport:
        record = self._store.get(REPORT_ENTITY, report_id)
        if record is None:
            raise NotFoundError(REPORT_ENTITY, report_id)
        return QualityReport.model_validate(record)

    # ---- internals ----

    def _commit(self, original: QualityReport, planned: QualityReport, updates: dict[str, Any]) -> QualityReport:
        record = planned.to_record()
        partial = {key: record[key] for key in updates}
        partial["version"] = original.version + 1
        # Version 0 may mean the attribute was never written
        expected: dict[str, Any] = {"status": str(original.status)}
        if original.version:
            expected["version"] = original.version
        stored = self._store.update(REPORT_ENTITY, original.id, partial, expected=expected)
        return QualityReport.model_validate(stored)

    def _freelancer(self, freelancer_id: str) -> Freelancer | None:
        record = self._store.get(FREELANCER_ENTITY, freelancer_id)
        if record is None:
            logger.warning("Freelancer %s not found; skipping freelancer notification", freelancer_id)
            return None
        return Freelancer.model_validate(record)

    def _managers(self) -> list[User]:
        seen: dict[str, User] = {}
        for role in (Role.ADMIN, Role.PROJECT_MANAGER):
            for record in self._store.filter(USER_ENTITY, role=str(role)):
                user = User.model_validate(record)
                seen.setdefault(user.id, user)
        return list(seen.values())

    def _build_intents(
        self,
        action: Action,
        report: QualityReport,
        settings: QualitySettings,
        comment: Optional[str],
    ) -> list[NotificationIntent]:
        freelancer = self._freelancer(report.freelancer_id)

        if action is Action.SUBMIT_FOR_REVIEW:
            if freelancer is None:
                return []
            return [templates.review_required(
                freelancer, report, report.review_deadline, settings.dispute_period_days,
                settings.auto_accept_enabled, self._signature,
            )]

        if action is Action.DISPUTE:
            name = freelancer.full_name if freelancer else "Unknown"
            intents = [
                templates.dispute_notice(m.email, name, report, comment or "", self._app_url)
                for m in self._managers()
            ]
            if report.reviewer_id:
                record = self._store.get(USER_ENTITY, report.reviewer_id)
                if record is not None:
                    reviewer = User.model_validate(record)
                    intents.append(templates.reviewer_dispute_notice(reviewer.email, name, report, comment or ""))
            return intents

        if action is Action.FINALIZE:
            if freelancer is None:
                return []
            return [templates.final_decision(freelancer, report, comment or "", self._signature)]

        if action is Action.AUTO_ACCEPT:
            if freelancer is None:
                return []
            return [templates.auto_accepted(freelancer, report, self._signature)]

        return []
