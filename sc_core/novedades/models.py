# sc_core/novedades/models.py
from __future__ import annotations

from typing import Any, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from sc_core.catalogs.models import EstadoNovedad, Prioridad, SubtipoNovedad, TipoNovedad
from sc_core.common.models import TimeStampedModel
from sc_core.novedades.constants import OrigenLlamada, Turno
from sc_core.resources.models import (
    Cuadrante,
    Direccion,
    PersonalSeguridad,
    Sector,
    UnidadOficina,
    Vehiculo,
)


class ActiveNovedadManager(models.Manager):
    """
    Active, non-deleted incidents only. Use `Novedad.all_objects` to reach
    soft-deleted rows.
    """

    def get_queryset(self):
        return super().get_queryset().filter(estado=True, deleted_at__isnull=True)


class Novedad(TimeStampedModel):
    """
    Reported incident. `estado_novedad` moves over the record's life and every
    move is written to HistorialEstadoNovedad by the status-history receivers.
    """
    novedad_code = models.CharField(max_length=20, unique=True)

    # Classification
    tipo_novedad = models.ForeignKey(TipoNovedad, on_delete=models.PROTECT, related_name="novedades")
    subtipo_novedad = models.ForeignKey(SubtipoNovedad, on_delete=models.PROTECT, related_name="novedades")
    prioridad_actual = models.CharField(max_length=8, choices=Prioridad.choices, default=Prioridad.MEDIA, db_index=True)

    # Status
    estado_novedad = models.ForeignKey(EstadoNovedad, on_delete=models.PROTECT, related_name="novedades")

    # Timeline
    fecha_hora_ocurrencia = models.DateTimeField(db_index=True)
    fecha_hora_reporte = models.DateTimeField(default=timezone.now)
    fecha_despacho = models.DateTimeField(null=True, blank=True)
    fecha_llegada = models.DateTimeField(null=True, blank=True)
    fecha_cierre = models.DateTimeField(null=True, blank=True)
    turno = models.CharField(max_length=8, choices=Turno.choices)

    # Location
    localizacion = models.CharField(max_length=500, blank=True, default="")
    referencia_ubicacion = models.CharField(max_length=500, blank=True, default="")
    direccion = models.ForeignKey(Direccion, on_delete=models.PROTECT, null=True, blank=True, related_name="novedades")
    sector = models.ForeignKey(Sector, on_delete=models.PROTECT, null=True, blank=True, related_name="novedades")
    cuadrante = models.ForeignKey(Cuadrante, on_delete=models.PROTECT, null=True, blank=True, related_name="novedades")
    latitud = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    longitud = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)
    ubigeo_code = models.CharField(max_length=6, blank=True, default="")

    # Origin / reporter
    origen_llamada = models.CharField(max_length=24, choices=OrigenLlamada.choices, default=OrigenLlamada.TELEFONO_107)
    reportante_nombre = models.CharField(max_length=150, blank=True, default="")
    reportante_telefono = models.CharField(max_length=20, blank=True, default="")
    reportante_doc_identidad = models.CharField(max_length=30, blank=True, default="")
    es_anonimo = models.BooleanField(default=False)

    descripcion = models.TextField(blank=True, default="")
    observaciones = models.TextField(blank=True, default="")

    # Assigned resources
    unidad_oficina = models.ForeignKey(UnidadOficina, on_delete=models.PROTECT, null=True, blank=True, related_name="novedades")
    vehiculo = models.ForeignKey(Vehiculo, on_delete=models.PROTECT, null=True, blank=True, related_name="novedades")
    personal_cargo = models.ForeignKey(
        PersonalSeguridad, on_delete=models.PROTECT, null=True, blank=True, related_name="novedades_a_cargo"
    )
    personal_seguridad2 = models.ForeignKey(PersonalSeguridad, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    personal_seguridad3 = models.ForeignKey(PersonalSeguridad, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    personal_seguridad4 = models.ForeignKey(PersonalSeguridad, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    km_inicial = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    km_final = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    # Dispatch ownership: first dispatcher wins permanently.
    usuario_despacho = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="novedades_despachadas",
        null=True,
        blank=True,
    )

    # Derived / follow-up
    tiempo_respuesta_min = models.IntegerField(null=True, blank=True)
    requiere_seguimiento = models.BooleanField(default=False)
    fecha_proxima_revision = models.DateTimeField(null=True, blank=True)
    perdidas_materiales_estimadas = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    # Actors
    usuario_registro = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="novedades_registradas",
    )
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name="+")

    # Soft delete
    estado = models.BooleanField(default=True, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name="+")

    objects = ActiveNovedadManager()
    all_objects = models.Manager()

    class Meta:
        db_table = "novedades_incidentes"
        indexes = [
            models.Index(fields=["estado_novedad", "estado"], name="nov_estado_activo_idx"),
            models.Index(fields=["sector", "cuadrante"], name="nov_sector_cuadrante_idx"),
            models.Index(fields=["prioridad_actual", "fecha_hora_ocurrencia"], name="nov_prioridad_ocurr_idx"),
        ]
        permissions = [
            ("asignar_recursos", "Can assign resources to a novedad"),
        ]

    def __str__(self) -> str:
        return f"Novedad({self.novedad_code})"

    def is_dispatch_locked_for(self, user_id: Optional[int]) -> bool:
        return self.usuario_despacho_id is not None and self.usuario_despacho_id != user_id

    def stage_history(self, **fields: Any) -> None:
        """
        Attach notes/metadata/overrides for the history entry the next save()
        writes if the status changes. Consumed (and cleared) by that save.
        """
        staged = dict(getattr(self, "_staged_history", None) or {})
        staged.update({k: v for k, v in fields.items() if v is not None})
        self._staged_history = staged

    def pop_staged_history(self) -> dict[str, Any]:
        staged = getattr(self, "_staged_history", None) or {}
        self._staged_history = None
        return staged


class NovedadCodeCounter(models.Model):
    """
    Single-row table. Locking it serialises code generation, including the
    very first code when no incident exists yet.
    """
    SINGLETON_ID = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID)
    last_value = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "novedades_code_counter"


class HistorialEstadoNovedad(models.Model):
    """
    Append-only ledger of status transitions per incident.
    """
    novedad = models.ForeignKey(Novedad, on_delete=models.PROTECT, related_name="historial")
    estado_anterior = models.ForeignKey(EstadoNovedad, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    estado_nuevo = models.ForeignKey(EstadoNovedad, on_delete=models.PROTECT, related_name="+")
    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="historial_estados_novedad",
    )
    tiempo_en_estado_min = models.IntegerField(null=True, blank=True)
    observaciones = models.TextField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)
    fecha_cambio = models.DateTimeField(default=timezone.now, db_index=True)

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name="+")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "historial_estado_novedades"
        indexes = [
            models.Index(fields=["novedad", "fecha_cambio", "id"], name="hist_novedad_fecha_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.novedad_id}: {self.estado_anterior_id} -> {self.estado_nuevo_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("HistorialEstadoNovedad is append-only and cannot be modified.")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("HistorialEstadoNovedad is append-only and cannot be deleted.")
