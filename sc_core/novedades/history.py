# sc_core/novedades/history.py
from __future__ import annotations

import logging
from typing import Any, Optional

from django.utils import timezone

from sc_core.novedades.models import HistorialEstadoNovedad, Novedad

logger = logging.getLogger(__name__)


def append_history(
    *,
    novedad: Novedad,
    estado_nuevo_id: int,
    estado_anterior_id: Optional[int] = None,
    usuario_id: Optional[int] = None,
    tiempo_en_estado_min: Optional[int] = None,
    observaciones: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
    created_by_id: Optional[int] = None,
    updated_by_id: Optional[int] = None,
    fecha_cambio=None,
) -> HistorialEstadoNovedad:
    """
    Write one ledger row inside the caller's transaction; if the transaction
    rolls back the row goes with it.

    Deciding *whether* a status change deserves a row is not done here: the
    creation path and the status-history receivers are the only callers that
    record transitions.
    """
    entry = HistorialEstadoNovedad.objects.create(
        novedad=novedad,
        estado_anterior_id=estado_anterior_id,
        estado_nuevo_id=estado_nuevo_id,
        usuario_id=usuario_id,
        tiempo_en_estado_min=tiempo_en_estado_min,
        observaciones=observaciones,
        metadata=metadata,
        fecha_cambio=fecha_cambio or timezone.now(),
        created_by_id=created_by_id if created_by_id is not None else usuario_id,
        updated_by_id=updated_by_id if updated_by_id is not None else usuario_id,
    )
    logger.debug(
        "Historial novedad=%s %s -> %s by user=%s",
        novedad.pk,
        estado_anterior_id,
        estado_nuevo_id,
        usuario_id,
    )
    return entry
