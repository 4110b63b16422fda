from django.conf import settings
import django.core.serializers.json
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "event_code",
                    models.CharField(
                        choices=[
                            ("novedad.created", "Novedad creada"),
                            ("novedad.updated", "Novedad actualizada"),
                            ("novedad.deleted", "Novedad eliminada"),
                            ("novedad.asignar", "Recursos asignados"),
                            ("novedad.historial", "Historial registrado"),
                        ],
                        db_index=True,
                        max_length=128,
                    ),
                ),
                ("entity_type", models.CharField(db_index=True, default="Novedad", max_length=128)),
                ("entity_id", models.CharField(db_index=True, max_length=64)),
                ("novedad_code", models.CharField(blank=True, db_index=True, default="", max_length=20)),
                ("occurred_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "metadata",
                    models.JSONField(default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                (
                    "actor_user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="audit_events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "audit_audit_event",
                "indexes": [
                    models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx"),
                    models.Index(fields=["event_code", "occurred_at"], name="audit_event_code_idx"),
                ],
            },
        ),
    ]
