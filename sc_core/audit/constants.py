# sc_core/audit/constants.py
from django.db import models


class NovedadAuditEvent(models.TextChoices):
    CREATED = "novedad.created", "Novedad creada"
    UPDATED = "novedad.updated", "Novedad actualizada"
    DELETED = "novedad.deleted", "Novedad eliminada"
    ASIGNAR = "novedad.asignar", "Recursos asignados"
    HISTORIAL = "novedad.historial", "Historial registrado"
