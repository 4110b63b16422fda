from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EstadoNovedad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("estado", models.BooleanField(db_index=True, default=True)),
                ("nombre", models.CharField(max_length=50, unique=True)),
                ("descripcion", models.CharField(blank=True, default="", max_length=255)),
                ("color_hex", models.CharField(default="#6B7280", max_length=7)),
                ("icono", models.CharField(blank=True, default="", max_length=50)),
                ("orden", models.IntegerField(db_index=True, default=0)),
                ("es_inicial", models.BooleanField(default=False)),
                ("es_final", models.BooleanField(default=False)),
                ("requiere_unidad", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "estados_novedad",
                "ordering": ["orden", "id"],
            },
        ),
        migrations.CreateModel(
            name="TipoNovedad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nombre", models.CharField(max_length=100)),
                ("estado", models.BooleanField(db_index=True, default=True)),
                ("color_hex", models.CharField(default="#6B7280", max_length=7)),
                ("icono", models.CharField(blank=True, default="", max_length=50)),
            ],
            options={
                "db_table": "tipos_novedad",
                "ordering": ["nombre"],
            },
        ),
        migrations.CreateModel(
            name="SubtipoNovedad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nombre", models.CharField(max_length=100)),
                ("estado", models.BooleanField(db_index=True, default=True)),
                ("descripcion", models.TextField(blank=True, default="")),
                (
                    "prioridad",
                    models.CharField(
                        blank=True,
                        choices=[("ALTA", "Alta"), ("MEDIA", "Media"), ("BAJA", "Baja")],
                        default="MEDIA",
                        max_length=8,
                    ),
                ),
                ("tiempo_respuesta_min", models.IntegerField(blank=True, null=True)),
                (
                    "tipo_novedad",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="subtipos",
                        to="catalogs.tiponovedad",
                    ),
                ),
            ],
            options={
                "db_table": "subtipos_novedad",
                "ordering": ["tipo_novedad_id", "nombre"],
            },
        ),
        migrations.AddConstraint(
            model_name="estadonovedad",
            constraint=models.UniqueConstraint(
                condition=models.Q(("es_inicial", True), ("estado", True)),
                fields=("es_inicial",),
                name="uq_estado_novedad_single_initial",
            ),
        ),
    ]
