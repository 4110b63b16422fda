# sc_core/novedades/apps.py
from django.apps import AppConfig


class NovedadesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sc_core.novedades"

    def ready(self):
        # Registers the status-history receivers.
        import sc_core.novedades.signals  # noqa: F401
