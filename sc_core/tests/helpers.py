# sc_core/tests/helpers.py
from datetime import datetime

from django.utils import timezone


def local_dt(year, month, day, hour=0, minute=0):
    """Aware datetime in the configured TIME_ZONE."""
    return timezone.make_aware(datetime(year, month, day, hour, minute))


def body(resp):
    return resp.json()
