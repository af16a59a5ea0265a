"""EscalationEvaluator: threshold checks over a freelancer's eligible report history.

Two independent rules, both of which may fire on one check:

* combined score below ``probation_threshold``: warn the freelancer, notify admins
* last three LQA scores all below ``LOW_LQA_THRESHOLD``: urgent freelancer warning

No deduplication: checking an unchanged history twice emits the same events.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from linguaqa.core.exceptions import NotFoundError
from linguaqa.core.protocols import IEntityStore
from linguaqa.models.notifications import (
    EscalationEvent,
    EscalationOutcome,
    EscalationType,
    NotificationIntent,
)
from linguaqa.models.quality import (
    FREELANCER_ENTITY,
    REPORT_ENTITY,
    USER_ENTITY,
    Freelancer,
    QualityReport,
    QualitySettings,
    Role,
    User,
)
from linguaqa.notifications.dispatcher import NotificationDispatcher
from linguaqa.quality import templates
from linguaqa.quality.scoring import ScoreAggregator, eligible
from linguaqa.quality.settings import SettingsLoader

logger = logging.getLogger(__name__)

MIN_SAMPLE = 3
CONSECUTIVE_WINDOW = 3
LOW_LQA_THRESHOLD = 70

# Reports without a created_date sort as the oldest
_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def evaluate(
    freelancer: Freelancer,
    reports: list[QualityReport],
    settings: QualitySettings,
) -> list[EscalationEvent]:
    """Apply both escalation rules to a report history. Pure."""
    pool = eligible(reports)
    if len(pool) < MIN_SAMPLE:
        return []

    events: list[EscalationEvent] = []

    summary = ScoreAggregator.compute(pool, settings)
    if summary.combined is not None and summary.combined < settings.probation_threshold:
        events.append(EscalationEvent(
            type=EscalationType.FREELANCER_WARNING,
            freelancer_id=freelancer.id,
            freelancer_name=freelancer.full_name,
            score=summary.combined,
        ))

    recent = sorted(
        (r for r in pool if r.lqa_score is not None),
        key=lambda r: r.created_date or _UNDATED,
        reverse=True,
    )[:CONSECUTIVE_WINDOW]
    if len(recent) == CONSECUTIVE_WINDOW and all(r.lqa_score < LOW_LQA_THRESHOLD for r in recent):
        events.append(EscalationEvent(
            type=EscalationType.CONSECUTIVE_LOW_LQA,
            freelancer_id=freelancer.id,
            freelancer_name=freelancer.full_name,
            scores=[r.lqa_score for r in recent],
        ))

    return events


class EscalationEvaluator:
    """Reads history for one freelancer and turns rule hits into notices."""

    def __init__(
        self,
        *,
        store: IEntityStore,
        settings_loader: SettingsLoader,
        dispatcher: NotificationDispatcher | None = None,
        signature: str = templates.DEFAULT_SIGNATURE,
    ) -> None:
        self._store = store
        self._settings = settings_loader
        self._dispatcher = dispatcher
        self._signature = signature

    def check(self, freelancer_id: str) -> list[EscalationEvent]:
        return self.evaluate(freelancer_id).events

    def check_and_notify(self, freelancer_id: str) -> EscalationOutcome:
        outcome = self.evaluate(freelancer_id)
        if self._dispatcher is not None and outcome.intents:
            self._dispatcher.dispatch(outcome.intents)
        return outcome

    def evaluate(self, freelancer_id: str) -> EscalationOutcome:
        """Run both rules and build (but do not send) the resulting intents."""
        freelancer = self._freelancer(freelancer_id)
        settings = self._settings.load()
        reports = [
            QualityReport.model_validate(r)
            for r in self._store.filter(REPORT_ENTITY, freelancer_id=freelancer_id)
        ]
        pool = eligible(reports)
        events = evaluate(freelancer, pool, settings)

        intents: list[NotificationIntent] = []
        for event in events:
            intents.extend(self._intents_for(event, freelancer, settings, len(pool)))

        if events:
            logger.info(
                "Freelancer %s escalation: %s",
                freelancer_id, ", ".join(str(e.type) for e in events),
            )
        return EscalationOutcome(
            freelancer_id=freelancer_id,
            eligible_reports=len(pool),
            events=events,
            intents=intents,
        )

    def _freelancer(self, freelancer_id: str) -> Freelancer:
        record = self._store.get(FREELANCER_ENTITY, freelancer_id)
        if record is None:
            raise NotFoundError(FREELANCER_ENTITY, freelancer_id)
        return Freelancer.model_validate(record)

    def _admins(self) -> list[User]:
        return [User.model_validate(r) for r in self._store.filter(USER_ENTITY, role=str(Role.ADMIN))]

    def _intents_for(
        self,
        event: EscalationEvent,
        freelancer: Freelancer,
        settings: QualitySettings,
        total: int,
    ) -> list[NotificationIntent]:
        if event.type is EscalationType.FREELANCER_WARNING:
            threshold = settings.probation_threshold
            intents = [templates.low_score_freelancer(freelancer, event.score, threshold, self._signature)]
            intents += [
                templates.low_score_admin(admin.email, freelancer, event.score, threshold, total)
                for admin in self._admins()
            ]
            return intents
        return [templates.consecutive_low_lqa(freelancer, event.scores, self._signature)]
