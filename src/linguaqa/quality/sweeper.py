"""DeadlineSweeper: auto-accepts reports whose dispute period has elapsed."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from linguaqa.core.exceptions import LinguaQAError
from linguaqa.core.protocols import IEntityStore
from linguaqa.models.notifications import SweepReport
from linguaqa.models.quality import REPORT_ENTITY, SYSTEM_ACTOR, QualityReport, ReportStatus, utcnow
from linguaqa.quality.settings import SettingsLoader
from linguaqa.quality.state_machine import ReportStateMachine

logger = logging.getLogger(__name__)


class DeadlineSweeper:
    """Runs the ``auto_accept`` transition for every overdue pending report.

    Meant for a scheduler (cron, EventBridge) or the admin endpoint. One bad
    report never stops the sweep.
    """

    def __init__(
        self,
        *,
        store: IEntityStore,
        state_machine: ReportStateMachine,
        settings_loader: SettingsLoader,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._machine = state_machine
        self._settings = settings_loader
        self._clock = clock

    def overdue(self, now: datetime) -> list[QualityReport]:
        pending = self._store.filter(REPORT_ENTITY, status=str(ReportStatus.PENDING_TRANSLATOR_REVIEW))
        reports = [QualityReport.model_validate(r) for r in pending]
        return [r for r in reports if r.review_deadline is not None and r.review_deadline <= now]

    def run(self) -> SweepReport:
        settings = self._settings.load()
        if not settings.auto_accept_enabled:
            logger.info("Auto-accept disabled; deadline sweep skipped")
            return SweepReport(enabled=False)

        now = self._clock()
        due = self.overdue(now)
        report = SweepReport(examined=len(due))
        for item in due:
            try:
                self._machine.auto_accept(item.id, SYSTEM_ACTOR)
            except LinguaQAError as exc:
                # Typically the translator acted between our read and write
                logger.warning("Auto-accept of report %s skipped: %s", item.id, exc)
                report.failed.append(item.id)
            else:
                report.auto_accepted.append(item.id)
        logger.info("Deadline sweep: %d accepted, %d skipped", len(report.auto_accepted), len(report.failed))
        return report
