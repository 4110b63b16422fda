# sc_core/novedades/filters.py
from __future__ import annotations

import django_filters
from django.db.models import Q

from sc_core.catalogs.models import Prioridad
from sc_core.novedades.models import Novedad


class NovedadFilter(django_filters.FilterSet):
    fecha_inicio = django_filters.DateTimeFilter(field_name="fecha_hora_ocurrencia", lookup_expr="gte")
    fecha_fin = django_filters.DateTimeFilter(field_name="fecha_hora_ocurrencia", lookup_expr="lte")
    estado_novedad_id = django_filters.NumberFilter(field_name="estado_novedad_id")
    prioridad_actual = django_filters.ChoiceFilter(choices=Prioridad.choices)
    sector_id = django_filters.NumberFilter(field_name="sector_id")
    tipo_novedad_id = django_filters.NumberFilter(field_name="tipo_novedad_id")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Novedad
        fields = []

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(novedad_code__icontains=value)
            | Q(descripcion__icontains=value)
            | Q(localizacion__icontains=value)
            | Q(reportante_nombre__icontains=value)
        )
