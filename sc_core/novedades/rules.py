# sc_core/novedades/rules.py
from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.utils import timezone

from sc_core.novedades.constants import Turno


def to_local(dt: datetime) -> datetime:
    """
    Aware instant in the configured TIME_ZONE. Naive values are taken to be
    local wall-clock time already.
    """
    if timezone.is_naive(dt):
        return timezone.make_aware(dt)
    return timezone.localtime(dt)


def turno_for(occurred_at: datetime) -> str:
    """
    [06:00, 14:00) -> MAÑANA, [14:00, 22:00) -> TARDE, otherwise NOCHE.
    """
    hour = to_local(occurred_at).hour
    if 6 <= hour < 14:
        return Turno.MANANA
    if 14 <= hour < 22:
        return Turno.TARDE
    return Turno.NOCHE


def whole_minutes_between(start: Optional[datetime], end: Optional[datetime]) -> Optional[int]:
    if start is None or end is None:
        return None
    return math.floor((to_local(end) - to_local(start)).total_seconds() / 60)


def format_code(number: int) -> str:
    return str(number).zfill(getattr(settings, "NOVEDADES_CODE_WIDTH", 6))


def parse_code(code: Optional[str]) -> Optional[int]:
    try:
        return int(str(code).strip())
    except (TypeError, ValueError):
        return None
