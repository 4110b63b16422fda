# sc_core/catalogs/management/commands/seed_estados.py

from django.core.management.base import BaseCommand
from django.db import transaction

from sc_core.catalogs.models import EstadoNovedad


DEFAULT_ESTADOS = [
    {"nombre": "Pendiente De Registro", "color_hex": "#F59E0B", "icono": "clock", "orden": 1,
     "es_inicial": True, "es_final": False, "requiere_unidad": False},
    {"nombre": "Asignado", "color_hex": "#3B82F6", "icono": "user-check", "orden": 2,
     "es_inicial": False, "es_final": False, "requiere_unidad": True},
    {"nombre": "En Camino", "color_hex": "#8B5CF6", "icono": "truck", "orden": 3,
     "es_inicial": False, "es_final": False, "requiere_unidad": True},
    {"nombre": "En Sitio", "color_hex": "#06B6D4", "icono": "map-pin", "orden": 4,
     "es_inicial": False, "es_final": False, "requiere_unidad": True},
    {"nombre": "En Atención", "color_hex": "#10B981", "icono": "activity", "orden": 5,
     "es_inicial": False, "es_final": False, "requiere_unidad": True},
    {"nombre": "Resuelto", "color_hex": "#22C55E", "icono": "check-circle", "orden": 6,
     "es_inicial": False, "es_final": True, "requiere_unidad": False},
    {"nombre": "Cerrado", "color_hex": "#6B7280", "icono": "lock", "orden": 7,
     "es_inicial": False, "es_final": True, "requiere_unidad": False},
    {"nombre": "Cancelado", "color_hex": "#EF4444", "icono": "x-circle", "orden": 8,
     "es_inicial": False, "es_final": True, "requiere_unidad": False},
]


class Command(BaseCommand):
    help = "Ensure the default incident status catalog exists (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        # Clear any other initial flag first so the single-initial constraint holds.
        initial_names = [e["nombre"] for e in DEFAULT_ESTADOS if e["es_inicial"]]
        EstadoNovedad.objects.filter(es_inicial=True).exclude(nombre__in=initial_names).update(es_inicial=False)

        created = 0
        updated = 0
        for data in DEFAULT_ESTADOS:
            defaults = {k: v for k, v in data.items() if k != "nombre"}
            defaults["estado"] = True
            _, was_created = EstadoNovedad.objects.update_or_create(nombre=data["nombre"], defaults=defaults)
            if was_created:
                created += 1
            else:
                updated += 1

        self.stdout.write(self.style.SUCCESS(f"Estados ensured. Created: {created}, updated: {updated}"))
