from rest_framework import serializers

from sc_core.catalogs.models import EstadoNovedad


class EstadoNovedadSerializer(serializers.ModelSerializer):
    class Meta:
        model = EstadoNovedad
        fields = [
            "id",
            "nombre",
            "descripcion",
            "color_hex",
            "icono",
            "orden",
            "es_inicial",
            "es_final",
            "requiere_unidad",
        ]
        read_only_fields = fields
