# sc_core/novedades/constants.py
from django.db import models


class Turno(models.TextChoices):
    MANANA = "MAÑANA", "Mañana"
    TARDE = "TARDE", "Tarde"
    NOCHE = "NOCHE", "Noche"


class OrigenLlamada(models.TextChoices):
    TELEFONO_107 = "TELEFONO_107", "Teléfono 107"
    BOTON_PANICO = "BOTON_PANICO", "Botón de pánico"
    CAMARA = "CAMARA", "Cámara"
    PATRULLAJE = "PATRULLAJE", "Patrullaje"
    CIUDADANO = "CIUDADANO", "Ciudadano"
    INTERVENCION_DIRECTA = "INTERVENCION_DIRECTA", "Intervención directa"
    OTROS = "OTROS", "Otros"


HISTORY_NOTE_CREATED = "Novedad creada"
HISTORY_NOTE_DISPATCHED = "Recursos asignados y unidad despachada"
