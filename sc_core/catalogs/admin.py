# sc_core/catalogs/admin.py
from django.contrib import admin

from sc_core.catalogs.models import EstadoNovedad, SubtipoNovedad, TipoNovedad


@admin.register(EstadoNovedad)
class EstadoNovedadAdmin(admin.ModelAdmin):
    list_display = ("id", "nombre", "orden", "es_inicial", "es_final", "requiere_unidad", "estado")
    list_filter = ("estado", "es_inicial", "es_final")
    search_fields = ("nombre",)
    ordering = ("orden",)


@admin.register(TipoNovedad)
class TipoNovedadAdmin(admin.ModelAdmin):
    list_display = ("id", "nombre", "estado")
    search_fields = ("nombre",)


@admin.register(SubtipoNovedad)
class SubtipoNovedadAdmin(admin.ModelAdmin):
    list_display = ("id", "nombre", "tipo_novedad", "prioridad", "estado")
    list_filter = ("prioridad", "estado")
    search_fields = ("nombre",)
    list_select_related = ("tipo_novedad",)
