# sc_core/audit/models.py
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from sc_core.audit.constants import NovedadAuditEvent


class AuditEvent(models.Model):
    """
    Immutable record of a mutating incident API call. `metadata` carries the
    action, HTTP method, request payload and the incident status right after
    the call.
    """
    event_code = models.CharField(max_length=128, choices=NovedadAuditEvent.choices, db_index=True)
    entity_type = models.CharField(max_length=128, default="Novedad", db_index=True)
    entity_id = models.CharField(max_length=64, db_index=True)
    novedad_code = models.CharField(max_length=20, blank=True, default="", db_index=True)

    actor_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="audit_events",
        null=True,
        blank=True,
    )

    occurred_at = models.DateTimeField(auto_now_add=True, db_index=True)
    metadata = models.JSONField(default=dict, encoder=DjangoJSONEncoder)

    class Meta:
        db_table = "audit_audit_event"
        indexes = [
            models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx"),
            models.Index(fields=["event_code", "occurred_at"], name="audit_event_code_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_code} {self.novedad_code or self.entity_id}"
