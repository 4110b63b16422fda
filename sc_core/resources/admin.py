from django.contrib import admin

from sc_core.resources.models import (
    Cuadrante,
    Direccion,
    PersonalSeguridad,
    Sector,
    UnidadOficina,
    Vehiculo,
)


@admin.register(Sector)
class SectorAdmin(admin.ModelAdmin):
    list_display = ("id", "sector_code", "nombre", "estado")
    search_fields = ("sector_code", "nombre")


@admin.register(Cuadrante)
class CuadranteAdmin(admin.ModelAdmin):
    list_display = ("id", "cuadrante_code", "nombre", "sector", "estado")
    search_fields = ("cuadrante_code", "nombre")
    list_select_related = ("sector",)


@admin.register(Direccion)
class DireccionAdmin(admin.ModelAdmin):
    list_display = ("id", "direccion_code", "direccion_completa", "sector", "cuadrante")
    search_fields = ("direccion_code", "direccion_completa")


@admin.register(UnidadOficina)
class UnidadOficinaAdmin(admin.ModelAdmin):
    list_display = ("id", "codigo", "nombre", "estado")
    search_fields = ("codigo", "nombre")


@admin.register(Vehiculo)
class VehiculoAdmin(admin.ModelAdmin):
    list_display = ("id", "codigo_vehiculo", "placa", "estado")
    search_fields = ("codigo_vehiculo", "placa")


@admin.register(PersonalSeguridad)
class PersonalSeguridadAdmin(admin.ModelAdmin):
    list_display = ("id", "doc_numero", "nombres", "apellido_paterno", "estado")
    search_fields = ("doc_numero", "nombres", "apellido_paterno")
