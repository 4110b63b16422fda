# sc_core/novedades/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from sc_core.catalogs.models import EstadoNovedad, Prioridad, SubtipoNovedad, TipoNovedad
from sc_core.novedades.constants import OrigenLlamada, Turno
from sc_core.novedades.models import HistorialEstadoNovedad, Novedad
from sc_core.resources.models import (
    Cuadrante,
    Direccion,
    PersonalSeguridad,
    Sector,
    UnidadOficina,
    Vehiculo,
)


def user_display_name(user) -> str | None:
    if user is None:
        return None
    full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return full_name or user.get_username()


# ----------------------------
# Input
# ----------------------------

class NovedadDescriptionFields(serializers.Serializer):
    """
    Location, reporter and free-text fields shared by create and update.
    Reference ids are plain integers; the database rejects unknown ones.
    """
    localizacion = serializers.CharField(required=False, allow_blank=True, max_length=500)
    referencia_ubicacion = serializers.CharField(required=False, allow_blank=True, max_length=500)
    direccion_id = serializers.IntegerField(required=False, allow_null=True)
    sector_id = serializers.IntegerField(required=False, allow_null=True)
    cuadrante_id = serializers.IntegerField(required=False, allow_null=True)
    latitud = serializers.DecimalField(
        max_digits=10, decimal_places=8, min_value=-90, max_value=90, required=False, allow_null=True
    )
    longitud = serializers.DecimalField(
        max_digits=11, decimal_places=8, min_value=-180, max_value=180, required=False, allow_null=True
    )
    ubigeo_code = serializers.CharField(required=False, allow_blank=True, max_length=6)
    origen_llamada = serializers.ChoiceField(choices=OrigenLlamada.choices, required=False)
    reportante_nombre = serializers.CharField(required=False, allow_blank=True, max_length=150)
    reportante_telefono = serializers.CharField(required=False, allow_blank=True, max_length=20)
    reportante_doc_identidad = serializers.CharField(required=False, allow_blank=True, max_length=30)
    es_anonimo = serializers.BooleanField(required=False)
    descripcion = serializers.CharField(required=False, allow_blank=True)
    observaciones = serializers.CharField(required=False, allow_blank=True)
    requiere_seguimiento = serializers.BooleanField(required=False)
    fecha_proxima_revision = serializers.DateTimeField(required=False, allow_null=True)


class NovedadCreateSerializer(NovedadDescriptionFields):
    tipo_novedad_id = serializers.IntegerField()
    subtipo_novedad_id = serializers.IntegerField()
    fecha_hora_ocurrencia = serializers.DateTimeField(required=False)


class NovedadUpdateSerializer(NovedadDescriptionFields):
    tipo_novedad_id = serializers.IntegerField(required=False)
    subtipo_novedad_id = serializers.IntegerField(required=False)
    estado_novedad_id = serializers.IntegerField(required=False)
    observaciones_cambio_estado = serializers.CharField(required=False, allow_blank=True)
    prioridad_actual = serializers.ChoiceField(choices=Prioridad.choices, required=False)

    fecha_hora_ocurrencia = serializers.DateTimeField(required=False)
    fecha_llegada = serializers.DateTimeField(required=False, allow_null=True)
    fecha_cierre = serializers.DateTimeField(required=False, allow_null=True)
    turno = serializers.ChoiceField(choices=Turno.choices, required=False)

    unidad_oficina_id = serializers.IntegerField(required=False, allow_null=True)
    vehiculo_id = serializers.IntegerField(required=False, allow_null=True)
    personal_cargo_id = serializers.IntegerField(required=False, allow_null=True)
    personal_seguridad2_id = serializers.IntegerField(required=False, allow_null=True)
    personal_seguridad3_id = serializers.IntegerField(required=False, allow_null=True)
    personal_seguridad4_id = serializers.IntegerField(required=False, allow_null=True)
    km_inicial = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    km_final = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    perdidas_materiales_estimadas = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )


class HistorialOverrideSerializer(serializers.Serializer):
    """
    Optional values for the history entry written by a dispatch; anything
    omitted is computed server-side.
    """
    estado_anterior_id = serializers.IntegerField(required=False, allow_null=True)
    estado_nuevo_id = serializers.IntegerField(required=False, allow_null=True)
    tiempo_en_estado_min = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    observaciones = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    metadata = serializers.JSONField(required=False, allow_null=True)
    created_by = serializers.IntegerField(required=False, allow_null=True)
    updated_by = serializers.IntegerField(required=False, allow_null=True)


class AsignarRecursosSerializer(serializers.Serializer):
    estado_novedad_id = serializers.IntegerField(required=False, allow_null=True)

    unidad_oficina_id = serializers.IntegerField(required=False, allow_null=True)
    vehiculo_id = serializers.IntegerField(required=False, allow_null=True)
    personal_cargo_id = serializers.IntegerField(required=False, allow_null=True)
    personal_seguridad2_id = serializers.IntegerField(required=False, allow_null=True)
    personal_seguridad3_id = serializers.IntegerField(required=False, allow_null=True)
    personal_seguridad4_id = serializers.IntegerField(required=False, allow_null=True)
    km_inicial = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    km_final = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    turno = serializers.ChoiceField(choices=Turno.choices, required=False, allow_blank=True)
    observaciones = serializers.CharField(required=False, allow_blank=True)

    fecha_despacho = serializers.DateTimeField(required=False, allow_null=True)
    fecha_llegada = serializers.DateTimeField(required=False, allow_null=True)
    requiere_seguimiento = serializers.BooleanField(required=False)
    fecha_proxima_revision = serializers.DateTimeField(required=False, allow_null=True)
    perdidas_materiales_estimadas = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )

    historial = HistorialOverrideSerializer(required=False, allow_null=True)


class HistorialCreateSerializer(serializers.Serializer):
    observaciones = serializers.CharField(required=False, allow_blank=True, default="")
    estado_nuevo_id = serializers.IntegerField(required=False, allow_null=True)
    metadata = serializers.JSONField(required=False, allow_null=True)


# ----------------------------
# Output
# ----------------------------

class TipoNovedadRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = TipoNovedad
        fields = ["id", "nombre", "color_hex", "icono"]


class SubtipoNovedadRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubtipoNovedad
        fields = ["id", "nombre", "prioridad", "tiempo_respuesta_min"]


class EstadoNovedadRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = EstadoNovedad
        fields = ["id", "nombre", "color_hex", "icono", "orden", "es_final"]


class SectorRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Sector
        fields = ["id", "sector_code", "nombre"]


class CuadranteRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Cuadrante
        fields = ["id", "cuadrante_code", "nombre"]


class DireccionRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Direccion
        fields = ["id", "direccion_code", "direccion_completa"]


class UnidadOficinaRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = UnidadOficina
        fields = ["id", "codigo", "nombre"]


class VehiculoRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vehiculo
        fields = ["id", "codigo_vehiculo", "placa"]


class PersonalRefSerializer(serializers.ModelSerializer):
    nombre_completo = serializers.CharField(read_only=True)

    class Meta:
        model = PersonalSeguridad
        fields = ["id", "nombre_completo", "doc_numero"]


class NovedadSerializer(serializers.ModelSerializer):
    tipo_novedad = TipoNovedadRefSerializer(read_only=True)
    subtipo_novedad = SubtipoNovedadRefSerializer(read_only=True)
    estado_novedad = EstadoNovedadRefSerializer(read_only=True)
    sector = SectorRefSerializer(read_only=True)
    cuadrante = CuadranteRefSerializer(read_only=True)
    direccion = DireccionRefSerializer(read_only=True)
    unidad_oficina = UnidadOficinaRefSerializer(read_only=True)
    vehiculo = VehiculoRefSerializer(read_only=True)
    personal_cargo = PersonalRefSerializer(read_only=True)
    usuario_despacho_nombre = serializers.SerializerMethodField()

    class Meta:
        model = Novedad
        fields = [
            "id",
            "novedad_code",
            "tipo_novedad_id",
            "tipo_novedad",
            "subtipo_novedad_id",
            "subtipo_novedad",
            "estado_novedad_id",
            "estado_novedad",
            "prioridad_actual",
            "fecha_hora_ocurrencia",
            "fecha_hora_reporte",
            "fecha_despacho",
            "fecha_llegada",
            "fecha_cierre",
            "turno",
            "localizacion",
            "referencia_ubicacion",
            "direccion_id",
            "direccion",
            "sector_id",
            "sector",
            "cuadrante_id",
            "cuadrante",
            "latitud",
            "longitud",
            "ubigeo_code",
            "origen_llamada",
            "reportante_nombre",
            "reportante_telefono",
            "reportante_doc_identidad",
            "es_anonimo",
            "descripcion",
            "observaciones",
            "unidad_oficina_id",
            "unidad_oficina",
            "vehiculo_id",
            "vehiculo",
            "personal_cargo_id",
            "personal_cargo",
            "personal_seguridad2_id",
            "personal_seguridad3_id",
            "personal_seguridad4_id",
            "km_inicial",
            "km_final",
            "usuario_despacho_id",
            "usuario_despacho_nombre",
            "tiempo_respuesta_min",
            "requiere_seguimiento",
            "fecha_proxima_revision",
            "perdidas_materiales_estimadas",
            "usuario_registro_id",
            "created_by_id",
            "updated_by_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_usuario_despacho_nombre(self, obj: Novedad) -> str | None:
        return user_display_name(obj.usuario_despacho)


class HistorialEstadoNovedadSerializer(serializers.ModelSerializer):
    estado_anterior = EstadoNovedadRefSerializer(read_only=True)
    estado_nuevo = EstadoNovedadRefSerializer(read_only=True)
    usuario_nombre = serializers.SerializerMethodField()

    class Meta:
        model = HistorialEstadoNovedad
        fields = [
            "id",
            "novedad_id",
            "estado_anterior_id",
            "estado_anterior",
            "estado_nuevo_id",
            "estado_nuevo",
            "usuario_id",
            "usuario_nombre",
            "tiempo_en_estado_min",
            "observaciones",
            "metadata",
            "fecha_cambio",
            "created_by_id",
            "updated_by_id",
            "created_at",
        ]
        read_only_fields = fields

    def get_usuario_nombre(self, obj: HistorialEstadoNovedad) -> str | None:
        return user_display_name(obj.usuario)
