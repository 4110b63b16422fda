# sc_core/catalogs/selectors.py
from __future__ import annotations

from typing import Iterable, Optional

from django.db.models import QuerySet

from sc_core.catalogs.models import EstadoNovedad, SubtipoNovedad, TipoNovedad


class StatusCatalog:
    """
    Read-only lookups over the status catalog.
    """

    @staticmethod
    def find_initial() -> Optional[EstadoNovedad]:
        return EstadoNovedad.objects.filter(es_inicial=True, estado=True).first()

    @staticmethod
    def find_by_name_in(names: Iterable[str]) -> Optional[EstadoNovedad]:
        """
        First active entry matching `names`, honouring the order of `names`
        rather than the table order.
        """
        names = list(names)
        found = {e.nombre: e for e in EstadoNovedad.objects.filter(nombre__in=names, estado=True)}
        for name in names:
            if name in found:
                return found[name]
        return None

    @staticmethod
    def find_by_id(estado_id, *, active_only: bool = True) -> Optional[EstadoNovedad]:
        qs = EstadoNovedad.objects.filter(id=estado_id)
        if active_only:
            qs = qs.filter(estado=True)
        return qs.first()

    @staticmethod
    def list_active() -> QuerySet[EstadoNovedad]:
        return EstadoNovedad.objects.filter(estado=True).order_by("orden", "id")

    @staticmethod
    def in_attention_ids() -> list[int]:
        return list(
            EstadoNovedad.objects.filter(estado=True, es_inicial=False, es_final=False).values_list("id", flat=True)
        )


def get_tipo(tipo_id) -> Optional[TipoNovedad]:
    return TipoNovedad.objects.filter(id=tipo_id, estado=True).first()


def get_subtipo(subtipo_id) -> Optional[SubtipoNovedad]:
    return SubtipoNovedad.objects.filter(id=subtipo_id, estado=True).first()
