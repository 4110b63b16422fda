from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


def _user_fk(related_name, null=True):
    if null:
        return models.ForeignKey(
            blank=True,
            null=True,
            on_delete=django.db.models.deletion.PROTECT,
            related_name=related_name,
            to=settings.AUTH_USER_MODEL,
        )
    return models.ForeignKey(
        on_delete=django.db.models.deletion.PROTECT,
        related_name=related_name,
        to=settings.AUTH_USER_MODEL,
    )


def _fk(to, related_name, null=True):
    if null:
        return models.ForeignKey(
            blank=True,
            null=True,
            on_delete=django.db.models.deletion.PROTECT,
            related_name=related_name,
            to=to,
        )
    return models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name=related_name, to=to)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("catalogs", "0001_initial"),
        ("resources", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Novedad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("novedad_code", models.CharField(max_length=20, unique=True)),
                (
                    "prioridad_actual",
                    models.CharField(
                        choices=[("ALTA", "Alta"), ("MEDIA", "Media"), ("BAJA", "Baja")],
                        db_index=True,
                        default="MEDIA",
                        max_length=8,
                    ),
                ),
                ("fecha_hora_ocurrencia", models.DateTimeField(db_index=True)),
                ("fecha_hora_reporte", models.DateTimeField(default=django.utils.timezone.now)),
                ("fecha_despacho", models.DateTimeField(blank=True, null=True)),
                ("fecha_llegada", models.DateTimeField(blank=True, null=True)),
                ("fecha_cierre", models.DateTimeField(blank=True, null=True)),
                (
                    "turno",
                    models.CharField(
                        choices=[("MAÑANA", "Mañana"), ("TARDE", "Tarde"), ("NOCHE", "Noche")],
                        max_length=8,
                    ),
                ),
                ("localizacion", models.CharField(blank=True, default="", max_length=500)),
                ("referencia_ubicacion", models.CharField(blank=True, default="", max_length=500)),
                ("latitud", models.DecimalField(blank=True, decimal_places=8, max_digits=10, null=True)),
                ("longitud", models.DecimalField(blank=True, decimal_places=8, max_digits=11, null=True)),
                ("ubigeo_code", models.CharField(blank=True, default="", max_length=6)),
                (
                    "origen_llamada",
                    models.CharField(
                        choices=[
                            ("TELEFONO_107", "Teléfono 107"),
                            ("BOTON_PANICO", "Botón de pánico"),
                            ("CAMARA", "Cámara"),
                            ("PATRULLAJE", "Patrullaje"),
                            ("CIUDADANO", "Ciudadano"),
                            ("INTERVENCION_DIRECTA", "Intervención directa"),
                            ("OTROS", "Otros"),
                        ],
                        default="TELEFONO_107",
                        max_length=24,
                    ),
                ),
                ("reportante_nombre", models.CharField(blank=True, default="", max_length=150)),
                ("reportante_telefono", models.CharField(blank=True, default="", max_length=20)),
                ("reportante_doc_identidad", models.CharField(blank=True, default="", max_length=30)),
                ("es_anonimo", models.BooleanField(default=False)),
                ("descripcion", models.TextField(blank=True, default="")),
                ("observaciones", models.TextField(blank=True, default="")),
                ("km_inicial", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("km_final", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("tiempo_respuesta_min", models.IntegerField(blank=True, null=True)),
                ("requiere_seguimiento", models.BooleanField(default=False)),
                ("fecha_proxima_revision", models.DateTimeField(blank=True, null=True)),
                (
                    "perdidas_materiales_estimadas",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True),
                ),
                ("estado", models.BooleanField(db_index=True, default=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("tipo_novedad", _fk("catalogs.tiponovedad", "novedades", null=False)),
                ("subtipo_novedad", _fk("catalogs.subtiponovedad", "novedades", null=False)),
                ("estado_novedad", _fk("catalogs.estadonovedad", "novedades", null=False)),
                ("direccion", _fk("resources.direccion", "novedades")),
                ("sector", _fk("resources.sector", "novedades")),
                ("cuadrante", _fk("resources.cuadrante", "novedades")),
                ("unidad_oficina", _fk("resources.unidadoficina", "novedades")),
                ("vehiculo", _fk("resources.vehiculo", "novedades")),
                ("personal_cargo", _fk("resources.personalseguridad", "novedades_a_cargo")),
                ("personal_seguridad2", _fk("resources.personalseguridad", "+")),
                ("personal_seguridad3", _fk("resources.personalseguridad", "+")),
                ("personal_seguridad4", _fk("resources.personalseguridad", "+")),
                ("usuario_despacho", _user_fk("novedades_despachadas")),
                ("usuario_registro", _user_fk("novedades_registradas", null=False)),
                ("created_by", _user_fk("+")),
                ("updated_by", _user_fk("+")),
                ("deleted_by", _user_fk("+")),
            ],
            options={
                "db_table": "novedades_incidentes",
                "permissions": [("asignar_recursos", "Can assign resources to a novedad")],
            },
        ),
        migrations.CreateModel(
            name="NovedadCodeCounter",
            fields=[
                ("id", models.PositiveSmallIntegerField(default=1, primary_key=True, serialize=False)),
                ("last_value", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "novedades_code_counter"},
        ),
        migrations.CreateModel(
            name="HistorialEstadoNovedad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tiempo_en_estado_min", models.IntegerField(blank=True, null=True)),
                ("observaciones", models.TextField(blank=True, null=True)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("fecha_cambio", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("novedad", _fk("novedades.novedad", "historial", null=False)),
                ("estado_anterior", _fk("catalogs.estadonovedad", "+")),
                ("estado_nuevo", _fk("catalogs.estadonovedad", "+", null=False)),
                ("usuario", _user_fk("historial_estados_novedad")),
                ("created_by", _user_fk("+")),
                ("updated_by", _user_fk("+")),
            ],
            options={"db_table": "historial_estado_novedades"},
        ),
        migrations.AddIndex(
            model_name="novedad",
            index=models.Index(fields=["estado_novedad", "estado"], name="nov_estado_activo_idx"),
        ),
        migrations.AddIndex(
            model_name="novedad",
            index=models.Index(fields=["sector", "cuadrante"], name="nov_sector_cuadrante_idx"),
        ),
        migrations.AddIndex(
            model_name="novedad",
            index=models.Index(fields=["prioridad_actual", "fecha_hora_ocurrencia"], name="nov_prioridad_ocurr_idx"),
        ),
        migrations.AddIndex(
            model_name="historialestadonovedad",
            index=models.Index(fields=["novedad", "fecha_cambio", "id"], name="hist_novedad_fecha_idx"),
        ),
    ]
