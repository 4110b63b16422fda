from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.exceptions import NotFound

from sc_core.catalogs.models import EstadoNovedad
from sc_core.common.api.exceptions import DispatcherOwnershipError
from sc_core.novedades.constants import HISTORY_NOTE_DISPATCHED
from sc_core.novedades.models import HistorialEstadoNovedad
from sc_core.novedades.services import NovedadService

pytestmark = pytest.mark.django_db


def _assign(novedad, user, **data):
    NovedadService.assign_resources(novedad_id=novedad.id, actor_user_id=user.id, data=data)
    novedad.refresh_from_db()
    return novedad


def _history(novedad):
    return HistorialEstadoNovedad.objects.filter(novedad=novedad).order_by("id")


def test_first_dispatcher_wins(novedad, u1, vehiculo):
    before = timezone.now()
    _assign(novedad, u1, vehiculo_id=vehiculo.id)

    assert novedad.usuario_despacho_id == u1.id
    assert novedad.vehiculo_id == vehiculo.id
    assert novedad.fecha_despacho >= before

    _assign(novedad, u1, km_inicial=Decimal("10.00"))
    assert novedad.usuario_despacho_id == u1.id


def test_other_user_cannot_redispatch(novedad, u1, u2, vehiculo, otro_vehiculo):
    _assign(novedad, u1, vehiculo_id=vehiculo.id)

    with pytest.raises(DispatcherOwnershipError):
        _assign(novedad, u2, vehiculo_id=otro_vehiculo.id)

    novedad.refresh_from_db()
    assert novedad.vehiculo_id == vehiculo.id
    assert novedad.usuario_despacho_id == u1.id


def test_only_present_fields_are_merged(novedad, u1, unidad, vehiculo):
    _assign(novedad, u1, unidad_oficina_id=unidad.id)
    _assign(novedad, u1, vehiculo_id=vehiculo.id)

    assert novedad.unidad_oficina_id == unidad.id
    assert novedad.vehiculo_id == vehiculo.id


def test_falsy_values_do_not_overwrite(novedad, u1, agente):
    _assign(
        novedad,
        u1,
        km_inicial=Decimal("120.50"),
        personal_cargo_id=agente.id,
        observaciones="Patrullero 3",
        requiere_seguimiento=True,
    )

    _assign(
        novedad,
        u1,
        km_inicial=Decimal("0"),
        personal_cargo_id=None,
        observaciones="",
        requiere_seguimiento=False,
    )

    assert novedad.km_inicial == Decimal("120.50")
    assert novedad.personal_cargo_id == agente.id
    assert novedad.observaciones == "Patrullero 3"
    assert novedad.requiere_seguimiento is True


def test_dispatch_timestamp_set_on_every_call(novedad, u1):
    supplied = timezone.now() - timedelta(hours=2)
    _assign(novedad, u1, fecha_despacho=supplied)
    assert novedad.fecha_despacho == supplied

    _assign(novedad, u1)
    assert novedad.fecha_despacho > supplied


def test_explicit_status_takes_precedence(novedad, estados, u1):
    en_camino = estados["En Camino"]
    _assign(novedad, u1, estado_novedad_id=en_camino.id)
    assert novedad.estado_novedad_id == en_camino.id


def test_explicit_unknown_status_is_not_found(novedad, u1):
    with pytest.raises(NotFound):
        _assign(novedad, u1, estado_novedad_id=999999)

    novedad.refresh_from_db()
    assert novedad.usuario_despacho_id is None


def test_dispatch_status_resolved_by_name_order(novedad, estados, u1):
    despachado = EstadoNovedad.objects.create(nombre="DESPACHADO", orden=20)

    _assign(novedad, u1)

    # "DESPACHADO" precedes "Asignado" in NOVEDADES_DISPATCH_STATUS_NAMES
    assert novedad.estado_novedad_id == despachado.id


def test_dispatch_status_falls_back_to_asignado(novedad, estado_despachado, u1):
    _assign(novedad, u1)
    assert novedad.estado_novedad_id == estado_despachado.id


def test_status_unchanged_when_no_dispatch_status_exists(novedad, estado_inicial, estado_despachado, u1):
    estado_despachado.estado = False
    estado_despachado.save()

    _assign(novedad, u1, historial={"observaciones": "sin estado"})

    assert novedad.estado_novedad_id == estado_inicial.id
    assert novedad.fecha_despacho is not None
    assert _history(novedad).count() == 1


def test_historial_payload_annotates_the_single_entry(novedad, estado_inicial, estado_despachado, u1):
    _assign(
        novedad,
        u1,
        historial={
            "observaciones": "Unidad en ruta",
            "tiempo_en_estado_min": 5,
            "metadata": {"origen": "mapa"},
        },
    )

    rows = list(_history(novedad))
    assert len(rows) == 2

    entry = rows[-1]
    assert entry.estado_anterior_id == estado_inicial.id
    assert entry.estado_nuevo_id == estado_despachado.id
    assert entry.observaciones == "Unidad en ruta"
    assert entry.tiempo_en_estado_min == 5
    assert entry.metadata == {"origen": "mapa"}
    assert entry.usuario_id == u1.id


def test_empty_historial_payload_uses_server_defaults(novedad, u1):
    _assign(novedad, u1, historial={})

    entry = _history(novedad).last()
    assert entry.observaciones == HISTORY_NOTE_DISPATCHED


def test_status_change_without_payload_still_logged_once(novedad, estado_despachado, u1):
    _assign(novedad, u1)

    rows = list(_history(novedad))
    assert len(rows) == 2
    assert rows[-1].estado_nuevo_id == estado_despachado.id
    assert rows[-1].observaciones is None


def test_no_entry_when_status_already_dispatched(novedad, estado_despachado, u1):
    _assign(novedad, u1, historial={"observaciones": "primer despacho"})
    _assign(novedad, u1, historial={"observaciones": "re-despacho"})

    assert novedad.estado_novedad_id == estado_despachado.id
    assert _history(novedad).count() == 2


def test_arrival_sets_response_time_once(novedad, u1):
    t0 = novedad.fecha_hora_ocurrencia

    _assign(novedad, u1, fecha_llegada=t0 + timedelta(minutes=12))
    assert novedad.tiempo_respuesta_min == 12

    _assign(novedad, u1, fecha_llegada=t0 + timedelta(minutes=40))
    assert novedad.tiempo_respuesta_min == 12
