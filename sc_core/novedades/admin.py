# sc_core/novedades/admin.py
from django.contrib import admin

from sc_core.novedades.models import HistorialEstadoNovedad, Novedad


@admin.register(Novedad)
class NovedadAdmin(admin.ModelAdmin):
    list_display = (
        "novedad_code",
        "tipo_novedad",
        "estado_novedad",
        "prioridad_actual",
        "turno",
        "fecha_hora_ocurrencia",
        "usuario_despacho",
        "estado",
    )
    list_filter = ("estado", "prioridad_actual", "turno", "estado_novedad")
    search_fields = ("novedad_code", "descripcion", "localizacion")
    ordering = ("-fecha_hora_ocurrencia",)

    def get_queryset(self, request):
        return Novedad.all_objects.select_related("tipo_novedad", "estado_novedad", "usuario_despacho")


@admin.register(HistorialEstadoNovedad)
class HistorialEstadoNovedadAdmin(admin.ModelAdmin):
    list_display = ("novedad", "estado_anterior", "estado_nuevo", "usuario", "tiempo_en_estado_min", "fecha_cambio")
    list_filter = ("estado_nuevo",)
    search_fields = ("novedad__novedad_code",)
    ordering = ("-fecha_cambio",)

    # Append-only ledger
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
