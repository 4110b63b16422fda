# sc_core/resources/models.py
"""
Operational entities referenced by incidents. Only the columns incidents
join for display live here.
"""
from django.db import models

from sc_core.common.models import CatalogModel, TimeStampedModel


class Sector(CatalogModel):
    sector_code = models.CharField(max_length=10, unique=True)

    class Meta:
        db_table = "sectores"


class Cuadrante(CatalogModel):
    sector = models.ForeignKey(Sector, on_delete=models.PROTECT, related_name="cuadrantes")
    cuadrante_code = models.CharField(max_length=10, unique=True)

    class Meta:
        db_table = "cuadrantes"


class Direccion(TimeStampedModel):
    direccion_code = models.CharField(max_length=20, unique=True)
    direccion_completa = models.CharField(max_length=500)
    sector = models.ForeignKey(Sector, on_delete=models.PROTECT, null=True, blank=True, related_name="direcciones")
    cuadrante = models.ForeignKey(Cuadrante, on_delete=models.PROTECT, null=True, blank=True, related_name="direcciones")
    estado = models.BooleanField(default=True)

    class Meta:
        db_table = "direcciones"

    def __str__(self) -> str:
        return self.direccion_completa


class UnidadOficina(CatalogModel):
    codigo = models.CharField(max_length=20, unique=True)

    class Meta:
        db_table = "unidades_oficina"


class Vehiculo(TimeStampedModel):
    codigo_vehiculo = models.CharField(max_length=20, unique=True)
    placa = models.CharField(max_length=15, unique=True)
    estado = models.BooleanField(default=True)

    class Meta:
        db_table = "vehiculos"

    def __str__(self) -> str:
        return f"{self.codigo_vehiculo} ({self.placa})"


class PersonalSeguridad(TimeStampedModel):
    nombres = models.CharField(max_length=100)
    apellido_paterno = models.CharField(max_length=100)
    apellido_materno = models.CharField(max_length=100, blank=True, default="")
    doc_numero = models.CharField(max_length=20, unique=True)
    estado = models.BooleanField(default=True)

    class Meta:
        db_table = "personal_seguridad"

    @property
    def nombre_completo(self) -> str:
        return " ".join(p for p in (self.nombres, self.apellido_paterno, self.apellido_materno) if p)

    def __str__(self) -> str:
        return self.nombre_completo
