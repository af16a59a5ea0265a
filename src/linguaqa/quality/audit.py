"""Admin audit trail for report actions."""

from __future__ import annotations

import logging
from typing import Any

from linguaqa.core.protocols import IEntityStore
from linguaqa.models.quality import AUDIT_ENTITY, Actor, AuditEntry, QualityReport

logger = logging.getLogger(__name__)


class AuditLogger:
    """Writes AdminAuditLog records. A failed write never fails the action."""

    def __init__(self, store: IEntityStore) -> None:
        self._store = store

    def record(
        self,
        actor: Actor,
        action_type: str,
        report: QualityReport,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        entry = AuditEntry(
            actor_id=actor.id,
            actor_email=actor.email,
            action_type=action_type,
            target_id=report.id,
            metadata={
                "freelancer_id": report.freelancer_id,
                "project_name": report.project_name,
                "lqa_score": report.lqa_score,
                "qs_score": report.qs_score,
                **(metadata or {}),
            },
        )
        try:
            self._store.create(AUDIT_ENTITY, entry.model_dump(mode="json"))
        except Exception:
            logger.exception("Failed to log admin action %s for report %s", action_type, report.id)
