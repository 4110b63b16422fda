from django.db import migrations, models
import django.db.models.deletion


def _timestamps():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


def _catalog():
    return _timestamps() + [
        ("nombre", models.CharField(max_length=100)),
        ("estado", models.BooleanField(db_index=True, default=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Sector",
            fields=_catalog() + [
                ("sector_code", models.CharField(max_length=10, unique=True)),
            ],
            options={"db_table": "sectores"},
        ),
        migrations.CreateModel(
            name="Cuadrante",
            fields=_catalog() + [
                ("cuadrante_code", models.CharField(max_length=10, unique=True)),
                (
                    "sector",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cuadrantes",
                        to="resources.sector",
                    ),
                ),
            ],
            options={"db_table": "cuadrantes"},
        ),
        migrations.CreateModel(
            name="Direccion",
            fields=_timestamps() + [
                ("direccion_code", models.CharField(max_length=20, unique=True)),
                ("direccion_completa", models.CharField(max_length=500)),
                ("estado", models.BooleanField(default=True)),
                (
                    "cuadrante",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="direcciones",
                        to="resources.cuadrante",
                    ),
                ),
                (
                    "sector",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="direcciones",
                        to="resources.sector",
                    ),
                ),
            ],
            options={"db_table": "direcciones"},
        ),
        migrations.CreateModel(
            name="UnidadOficina",
            fields=_catalog() + [
                ("codigo", models.CharField(max_length=20, unique=True)),
            ],
            options={"db_table": "unidades_oficina"},
        ),
        migrations.CreateModel(
            name="Vehiculo",
            fields=_timestamps() + [
                ("codigo_vehiculo", models.CharField(max_length=20, unique=True)),
                ("placa", models.CharField(max_length=15, unique=True)),
                ("estado", models.BooleanField(default=True)),
            ],
            options={"db_table": "vehiculos"},
        ),
        migrations.CreateModel(
            name="PersonalSeguridad",
            fields=_timestamps() + [
                ("nombres", models.CharField(max_length=100)),
                ("apellido_paterno", models.CharField(max_length=100)),
                ("apellido_materno", models.CharField(blank=True, default="", max_length=100)),
                ("doc_numero", models.CharField(max_length=20, unique=True)),
                ("estado", models.BooleanField(default=True)),
            ],
            options={"db_table": "personal_seguridad"},
        ),
    ]
