# sc_core/novedades/services.py
from __future__ import annotations

import logging
from typing import Any, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from sc_core.catalogs.models import Prioridad
from sc_core.catalogs.selectors import StatusCatalog, get_subtipo, get_tipo
from sc_core.common.api.exceptions import ConfigurationError, DispatcherOwnershipError
from sc_core.novedades.constants import HISTORY_NOTE_CREATED, HISTORY_NOTE_DISPATCHED
from sc_core.novedades.history import append_history
from sc_core.novedades.models import HistorialEstadoNovedad, Novedad, NovedadCodeCounter
from sc_core.novedades.rules import format_code, parse_code, turno_for, whole_minutes_between
from sc_core.novedades.selectors import NovedadSelector

logger = logging.getLogger(__name__)


# Descriptive fields accepted on creation, copied as given.
CREATE_FIELDS = (
    "localizacion",
    "referencia_ubicacion",
    "direccion_id",
    "sector_id",
    "cuadrante_id",
    "latitud",
    "longitud",
    "ubigeo_code",
    "reportante_nombre",
    "reportante_telefono",
    "reportante_doc_identidad",
    "es_anonimo",
    "descripcion",
    "observaciones",
    "requiere_seguimiento",
    "fecha_proxima_revision",
)

UPDATE_FIELDS = CREATE_FIELDS + (
    "tipo_novedad_id",
    "subtipo_novedad_id",
    "estado_novedad_id",
    "prioridad_actual",
    "fecha_hora_ocurrencia",
    "fecha_llegada",
    "fecha_cierre",
    "origen_llamada",
    "turno",
    "unidad_oficina_id",
    "vehiculo_id",
    "personal_cargo_id",
    "personal_seguridad2_id",
    "personal_seguridad3_id",
    "personal_seguridad4_id",
    "km_inicial",
    "km_final",
    "perdidas_materiales_estimadas",
)

# Applied by assign_resources only when the incoming value is truthy.
ASSIGNMENT_FIELDS = (
    "unidad_oficina_id",
    "vehiculo_id",
    "personal_cargo_id",
    "personal_seguridad2_id",
    "personal_seguridad3_id",
    "personal_seguridad4_id",
    "km_inicial",
    "km_final",
    "turno",
    "observaciones",
    "fecha_llegada",
    "requiere_seguimiento",
    "fecha_proxima_revision",
    "perdidas_materiales_estimadas",
)


class NovedadService:
    """
    Write side of the incident lifecycle. Every public method is one
    transaction; status-change history is written by the post_save receiver
    in `sc_core.novedades.signals.status_history`.
    """

    @staticmethod
    def _get_locked(novedad_id) -> Novedad:
        try:
            return NovedadSelector.get_for_update(novedad_id=novedad_id)
        except NovedadSelector.NotFound:
            raise NotFound("Novedad no encontrada.")

    @staticmethod
    def _ensure_dispatcher(novedad: Novedad, actor_user_id: int) -> None:
        if novedad.is_dispatch_locked_for(actor_user_id):
            logger.warning(
                "Dispatcher mismatch on novedad=%s: dispatched by user=%s, attempted by user=%s",
                novedad.pk,
                novedad.usuario_despacho_id,
                actor_user_id,
            )
            raise DispatcherOwnershipError()

    @staticmethod
    def _lock_counter() -> NovedadCodeCounter:
        counter = NovedadCodeCounter.objects.select_for_update().filter(id=NovedadCodeCounter.SINGLETON_ID).first()
        if counter is not None:
            return counter

        # First code ever: insert the row under a savepoint so a concurrent
        # insert does not poison the outer transaction.
        try:
            with transaction.atomic(savepoint=True):
                NovedadCodeCounter.objects.create(id=NovedadCodeCounter.SINGLETON_ID)
        except IntegrityError:
            logger.debug("Code counter row created concurrently; locking existing row")
        return NovedadCodeCounter.objects.select_for_update().get(id=NovedadCodeCounter.SINGLETON_ID)

    @staticmethod
    def _next_code_locked() -> str:
        counter = NovedadService._lock_counter()

        latest_code = Novedad.all_objects.order_by("-id").values_list("novedad_code", flat=True).first()
        last = max(counter.last_value, parse_code(latest_code) or 0)

        counter.last_value = last + 1
        counter.save(update_fields=["last_value", "updated_at"])
        return format_code(counter.last_value)

    @staticmethod
    def _resolve_status(estado_id):
        estado = StatusCatalog.find_by_id(estado_id)
        if estado is None:
            raise NotFound("Estado de novedad no encontrado.")
        return estado

    @staticmethod
    @transaction.atomic
    def create(
        *,
        actor_user_id: int,
        tipo_novedad_id: int,
        subtipo_novedad_id: int,
        fecha_hora_ocurrencia=None,
        origen_llamada: Optional[str] = None,
        **data: Any,
    ) -> Novedad:
        if get_tipo(tipo_novedad_id) is None:
            raise NotFound("Tipo de novedad no encontrado.")

        subtipo = get_subtipo(subtipo_novedad_id)
        if subtipo is None:
            raise NotFound("Subtipo de novedad no encontrado.")

        initial = StatusCatalog.find_initial()
        if initial is None:
            logger.warning("No initial status configured; cannot create novedad")
            raise ConfigurationError("No hay un estado inicial configurado para novedades.")

        occurred_at = fecha_hora_ocurrencia or timezone.now()
        code = NovedadService._next_code_locked()

        novedad = Novedad(
            novedad_code=code,
            tipo_novedad_id=tipo_novedad_id,
            subtipo_novedad_id=subtipo.id,
            estado_novedad=initial,
            prioridad_actual=subtipo.prioridad or getattr(settings, "NOVEDADES_DEFAULT_PRIORITY", Prioridad.MEDIA),
            fecha_hora_ocurrencia=occurred_at,
            fecha_hora_reporte=timezone.now(),
            turno=turno_for(occurred_at),
            origen_llamada=origen_llamada or settings.NOVEDADES_DEFAULT_ORIGEN,
            usuario_registro_id=actor_user_id,
            created_by_id=actor_user_id,
            updated_by_id=actor_user_id,
        )
        for field in CREATE_FIELDS:
            if field in data and data[field] is not None:
                setattr(novedad, field, data[field])
        novedad.save(force_insert=True)

        append_history(
            novedad=novedad,
            estado_anterior_id=None,
            estado_nuevo_id=initial.id,
            usuario_id=actor_user_id,
            observaciones=HISTORY_NOTE_CREATED,
        )

        logger.info("Novedad created id=%s code=%s by user=%s", novedad.pk, code, actor_user_id)
        return novedad

    @staticmethod
    @transaction.atomic
    def update(*, novedad_id, actor_user_id: int, data: dict[str, Any]) -> Novedad:
        """
        Partial update. A status change here is recorded by the status-history
        receiver; `observaciones_cambio_estado` becomes that entry's notes.
        """
        data = dict(data)
        status_note = data.pop("observaciones_cambio_estado", None)

        novedad = NovedadService._get_locked(novedad_id)
        NovedadService._ensure_dispatcher(novedad, actor_user_id)

        if "estado_novedad_id" in data and data["estado_novedad_id"] != novedad.estado_novedad_id:
            NovedadService._resolve_status(data["estado_novedad_id"])
        if "tipo_novedad_id" in data and get_tipo(data["tipo_novedad_id"]) is None:
            raise NotFound("Tipo de novedad no encontrado.")
        if "subtipo_novedad_id" in data and get_subtipo(data["subtipo_novedad_id"]) is None:
            raise NotFound("Subtipo de novedad no encontrado.")

        arrival = data.get("fecha_llegada")
        if arrival and novedad.fecha_llegada is None:
            occurred_at = data.get("fecha_hora_ocurrencia") or novedad.fecha_hora_ocurrencia
            novedad.tiempo_respuesta_min = whole_minutes_between(occurred_at, arrival)

        if data.get("fecha_hora_ocurrencia") and "turno" not in data:
            data["turno"] = turno_for(data["fecha_hora_ocurrencia"])

        for field in UPDATE_FIELDS:
            if field in data:
                setattr(novedad, field, data[field])

        novedad.updated_by_id = actor_user_id
        if status_note:
            novedad.stage_history(observaciones=status_note)
        novedad.save()

        logger.info("Novedad updated id=%s by user=%s fields=%s", novedad.pk, actor_user_id, sorted(data))
        return novedad

    @staticmethod
    @transaction.atomic
    def assign_resources(*, novedad_id, actor_user_id: int, data: dict[str, Any]) -> Novedad:
        """
        Dispatch: attach unit/vehicle/personnel and move the incident to the
        explicit status, or to the first dispatch status found in
        NOVEDADES_DISPATCH_STATUS_NAMES, or leave it where it is.

        Optional fields are applied only when truthy; 0, False and "" leave the
        stored value untouched.
        """
        novedad = NovedadService._get_locked(novedad_id)
        NovedadService._ensure_dispatcher(novedad, actor_user_id)

        previous_status_id = novedad.estado_novedad_id

        if data.get("estado_novedad_id"):
            target = NovedadService._resolve_status(data["estado_novedad_id"])
        else:
            target = StatusCatalog.find_by_name_in(settings.NOVEDADES_DISPATCH_STATUS_NAMES)
        if target is not None:
            novedad.estado_novedad = target

        if data.get("fecha_llegada") and novedad.fecha_llegada is None:
            novedad.tiempo_respuesta_min = whole_minutes_between(novedad.fecha_hora_ocurrencia, data["fecha_llegada"])

        for field in ASSIGNMENT_FIELDS:
            value = data.get(field)
            if value:
                setattr(novedad, field, value)

        novedad.fecha_despacho = data.get("fecha_despacho") or timezone.now()
        if novedad.usuario_despacho_id is None:
            novedad.usuario_despacho_id = actor_user_id
        novedad.updated_by_id = actor_user_id

        historial = data.get("historial")
        if historial is not None and novedad.estado_novedad_id != previous_status_id:
            novedad.stage_history(
                estado_anterior_id=historial.get("estado_anterior_id") or previous_status_id,
                estado_nuevo_id=historial.get("estado_nuevo_id") or novedad.estado_novedad_id,
                tiempo_en_estado_min=historial.get("tiempo_en_estado_min"),
                observaciones=historial.get("observaciones") or HISTORY_NOTE_DISPATCHED,
                metadata=historial.get("metadata"),
                created_by=historial.get("created_by"),
                updated_by=historial.get("updated_by"),
            )

        novedad.save()

        logger.info(
            "Resources assigned to novedad id=%s by user=%s status %s -> %s",
            novedad.pk,
            actor_user_id,
            previous_status_id,
            novedad.estado_novedad_id,
        )
        return novedad

    @staticmethod
    @transaction.atomic
    def soft_delete(*, novedad_id, actor_user_id: int) -> None:
        novedad = NovedadService._get_locked(novedad_id)

        novedad.estado = False
        novedad.deleted_at = timezone.now()
        novedad.deleted_by_id = actor_user_id
        novedad.updated_by_id = actor_user_id
        novedad.save(update_fields=["estado", "deleted_at", "deleted_by", "updated_by", "updated_at"])

        logger.info("Novedad soft-deleted id=%s by user=%s", novedad.pk, actor_user_id)

    @staticmethod
    @transaction.atomic
    def register_history(
        *,
        novedad_id,
        actor_user_id: int,
        observaciones: str,
        estado_nuevo_id: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> HistorialEstadoNovedad:
        """
        Manual history entry. With a different target status the incident is
        moved and the receiver writes the (single) row carrying these notes;
        otherwise an annotation row is appended with previous == next.
        """
        if not (observaciones or "").strip():
            raise ValidationError({"observaciones": ["Las observaciones son obligatorias."]})

        novedad = NovedadService._get_locked(novedad_id)
        NovedadService._ensure_dispatcher(novedad, actor_user_id)

        current_status_id = novedad.estado_novedad_id

        if estado_nuevo_id and estado_nuevo_id != current_status_id:
            novedad.estado_novedad = NovedadService._resolve_status(estado_nuevo_id)
            novedad.updated_by_id = actor_user_id
            novedad.stage_history(observaciones=observaciones, metadata=metadata)
            novedad.save(update_fields=["estado_novedad", "updated_by", "updated_at"])
            entry = HistorialEstadoNovedad.objects.filter(novedad=novedad).order_by("-id").first()
        else:
            entry = append_history(
                novedad=novedad,
                estado_anterior_id=current_status_id,
                estado_nuevo_id=current_status_id,
                usuario_id=actor_user_id,
                observaciones=observaciones,
                metadata=metadata,
            )

        logger.info("History registered for novedad id=%s by user=%s", novedad.pk, actor_user_id)
        return entry
