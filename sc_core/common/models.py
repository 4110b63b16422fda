# sc_core/common/models.py
from __future__ import annotations

from django.db import models


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class CatalogModel(TimeStampedModel):
    """
    Catalog rows are never hard-deleted; `estado` toggles them on/off.
    """
    nombre = models.CharField(max_length=100)
    estado = models.BooleanField(default=True, db_index=True)

    class Meta:
        abstract = True

    def __str__(self) -> str:
        return self.nombre
