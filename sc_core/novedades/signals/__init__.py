from sc_core.novedades.signals import status_history  # noqa: F401
