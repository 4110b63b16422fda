# sc_core/audit/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.db import transaction

from sc_core.audit.models import AuditEvent
from sc_core.novedades.models import Novedad

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NovedadAuditRecord:
    event_code: str
    novedad_id: str
    novedad_code: str
    actor_user_id: int | None
    metadata: Dict[str, Any]


class AuditService:
    """
    Audit writer for incident mutations. Persists into AuditEvent (immutable).
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        event_code: str,
        novedad_id,
        actor_user_id: int | None,
        novedad_code: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> NovedadAuditRecord:
        metadata = metadata or {}
        novedad_id = str(novedad_id)

        AuditEvent.objects.create(
            event_code=event_code,
            entity_type="Novedad",
            entity_id=novedad_id,
            novedad_code=novedad_code or "",
            actor_user_id=actor_user_id,
            metadata=metadata,
        )
        logger.debug("Audit %s novedad=%s (%s) by user=%s", event_code, novedad_id, novedad_code, actor_user_id)

        return NovedadAuditRecord(
            event_code=event_code,
            novedad_id=novedad_id,
            novedad_code=novedad_code or "",
            actor_user_id=actor_user_id,
            metadata=metadata,
        )

    @staticmethod
    def log_action(
        *,
        event_code: str,
        novedad_id,
        actor_user_id: int | None,
        action: str | None,
        method: str,
        payload: Any,
    ) -> NovedadAuditRecord:
        """
        Record an API action against an incident together with its code and
        status right after the action. Soft-deleted incidents are still found.
        """
        snapshot = (
            Novedad.all_objects.filter(id=novedad_id)
            .values("novedad_code", "estado_novedad_id")
            .first()
        ) or {}

        return AuditService.log(
            event_code=event_code,
            novedad_id=novedad_id,
            actor_user_id=actor_user_id,
            novedad_code=snapshot.get("novedad_code", ""),
            metadata={
                "action": action,
                "method": method,
                "payload": payload,
                "estado_novedad_id": snapshot.get("estado_novedad_id"),
            },
        )
