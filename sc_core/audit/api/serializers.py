from rest_framework import serializers

from sc_core.audit.models import AuditEvent
from sc_core.novedades.api.serializers import user_display_name


class AuditEventSerializer(serializers.ModelSerializer):
    # API field name "timestamp" maps to the model's "occurred_at"
    timestamp = serializers.DateTimeField(source="occurred_at", read_only=True)
    actor_user_id = serializers.IntegerField(read_only=True)
    actor_nombre = serializers.SerializerMethodField()
    evento = serializers.CharField(source="get_event_code_display", read_only=True)

    class Meta:
        model = AuditEvent
        fields = [
            "id",
            "entity_type",
            "entity_id",
            "novedad_code",
            "event_code",
            "evento",
            "actor_user_id",
            "actor_nombre",
            "timestamp",
            "metadata",
        ]
        read_only_fields = fields

    def get_actor_nombre(self, obj: AuditEvent) -> str | None:
        return user_display_name(obj.actor_user)
