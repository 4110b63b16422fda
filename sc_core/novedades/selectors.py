# sc_core/novedades/selectors.py
from __future__ import annotations

from typing import Any

from django.db.models import Case, IntegerField, QuerySet, Value, When
from rest_framework.exceptions import ValidationError

from sc_core.catalogs.models import Prioridad
from sc_core.catalogs.selectors import StatusCatalog
from sc_core.novedades.filters import NovedadFilter
from sc_core.novedades.models import HistorialEstadoNovedad, Novedad


DETAIL_RELATIONS = (
    "tipo_novedad",
    "subtipo_novedad",
    "estado_novedad",
    "sector",
    "cuadrante",
    "direccion",
    "unidad_oficina",
    "vehiculo",
    "personal_cargo",
    "usuario_despacho",
)

_PRIORITY_RANK = Case(
    When(prioridad_actual=Prioridad.ALTA, then=Value(3)),
    When(prioridad_actual=Prioridad.MEDIA, then=Value(2)),
    When(prioridad_actual=Prioridad.BAJA, then=Value(1)),
    default=Value(0),
    output_field=IntegerField(),
)


class NovedadSelector:
    """
    Read-only queries for incidents and their status history.
    """

    class NotFound(Exception):
        pass

    @staticmethod
    def get_active(*, novedad_id) -> Novedad:
        try:
            return Novedad.objects.select_related(*DETAIL_RELATIONS).get(id=novedad_id)
        except Novedad.DoesNotExist:
            raise NovedadSelector.NotFound()

    @staticmethod
    def get_for_update(*, novedad_id) -> Novedad:
        """
        Row-locked fetch; call inside a transaction.
        """
        try:
            return Novedad.objects.select_for_update().get(id=novedad_id)
        except Novedad.DoesNotExist:
            raise NovedadSelector.NotFound()

    @staticmethod
    def exists_any(*, novedad_id) -> bool:
        """
        True for soft-deleted incidents too; their history stays readable.
        """
        return Novedad.all_objects.filter(id=novedad_id).exists()

    @staticmethod
    def list_active(*, params: Any) -> QuerySet[Novedad]:
        """
        Query params: fecha_inicio, fecha_fin, estado_novedad_id,
        prioridad_actual, sector_id, tipo_novedad_id, search.
        """
        qs = Novedad.objects.select_related(*DETAIL_RELATIONS)
        f = NovedadFilter(data=params, queryset=qs)
        if not f.is_valid():
            raise ValidationError(f.errors)
        return (
            f.qs.annotate(prioridad_rank=_PRIORITY_RANK)
            .order_by("-prioridad_rank", "-fecha_hora_ocurrencia", "-id")
        )

    @staticmethod
    def list_in_attention() -> QuerySet[Novedad]:
        """
        Active incidents whose status is neither the initial nor a final one.
        """
        return (
            Novedad.objects.select_related(*DETAIL_RELATIONS)
            .filter(estado_novedad_id__in=StatusCatalog.in_attention_ids())
            .annotate(prioridad_rank=_PRIORITY_RANK)
            .order_by("-prioridad_rank", "fecha_hora_ocurrencia", "id")
        )

    @staticmethod
    def list_history(*, novedad_id) -> QuerySet[HistorialEstadoNovedad]:
        """
        Newest first. Rows written in the same instant fall back to insert order.
        """
        return (
            HistorialEstadoNovedad.objects.filter(novedad_id=novedad_id)
            .select_related("estado_anterior", "estado_nuevo", "usuario")
            .order_by("-fecha_cambio", "-id")
        )
