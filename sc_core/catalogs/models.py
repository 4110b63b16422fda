# sc_core/catalogs/models.py
from django.db import models
from django.db.models import Q

from sc_core.common.models import CatalogModel


class Prioridad(models.TextChoices):
    ALTA = "ALTA", "Alta"
    MEDIA = "MEDIA", "Media"
    BAJA = "BAJA", "Baja"


class EstadoNovedad(CatalogModel):
    """
    Lifecycle stage of an incident. Transitions between entries are not
    restricted; `es_inicial` / `es_final` only describe the ends of the flow.
    """
    nombre = models.CharField(max_length=50, unique=True)
    descripcion = models.CharField(max_length=255, blank=True, default="")
    color_hex = models.CharField(max_length=7, default="#6B7280")
    icono = models.CharField(max_length=50, blank=True, default="")
    orden = models.IntegerField(default=0, db_index=True)

    es_inicial = models.BooleanField(default=False)
    es_final = models.BooleanField(default=False)
    requiere_unidad = models.BooleanField(default=False)

    class Meta:
        db_table = "estados_novedad"
        ordering = ["orden", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["es_inicial"],
                condition=Q(es_inicial=True, estado=True),
                name="uq_estado_novedad_single_initial",
            ),
        ]


class TipoNovedad(CatalogModel):
    color_hex = models.CharField(max_length=7, default="#6B7280")
    icono = models.CharField(max_length=50, blank=True, default="")

    class Meta:
        db_table = "tipos_novedad"
        ordering = ["nombre"]


class SubtipoNovedad(CatalogModel):
    tipo_novedad = models.ForeignKey(TipoNovedad, on_delete=models.PROTECT, related_name="subtipos")
    descripcion = models.TextField(blank=True, default="")
    prioridad = models.CharField(max_length=8, choices=Prioridad.choices, default=Prioridad.MEDIA, blank=True)
    tiempo_respuesta_min = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "subtipos_novedad"
        ordering = ["tipo_novedad_id", "nombre"]
