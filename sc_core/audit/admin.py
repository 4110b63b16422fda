from django.contrib import admin

from sc_core.audit.models import AuditEvent


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ("event_code", "novedad_code", "entity_id", "actor_user", "occurred_at")
    list_filter = ("event_code",)
    search_fields = ("novedad_code", "entity_id")
    readonly_fields = [f.name for f in AuditEvent._meta.fields]
    ordering = ("-occurred_at",)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
