import pytest
from rest_framework.exceptions import NotFound, ValidationError

from sc_core.common.api.exceptions import DispatcherOwnershipError
from sc_core.novedades.models import HistorialEstadoNovedad
from sc_core.novedades.services import NovedadService

pytestmark = pytest.mark.django_db


def test_annotation_keeps_status(novedad, estado_inicial, u1):
    entry = NovedadService.register_history(
        novedad_id=novedad.id,
        actor_user_id=u1.id,
        observaciones="Llamada de seguimiento al reportante",
        metadata={"canal": "telefono"},
    )

    novedad.refresh_from_db()
    assert novedad.estado_novedad_id == estado_inicial.id
    assert entry.estado_anterior_id == estado_inicial.id
    assert entry.estado_nuevo_id == estado_inicial.id
    assert entry.metadata == {"canal": "telefono"}
    assert HistorialEstadoNovedad.objects.filter(novedad=novedad).count() == 2


def test_status_change_writes_one_entry_with_notes(novedad, estados, estado_inicial, u1):
    en_atencion = estados["En Atención"]

    entry = NovedadService.register_history(
        novedad_id=novedad.id,
        actor_user_id=u1.id,
        observaciones="Se atiende en sitio",
        estado_nuevo_id=en_atencion.id,
    )

    novedad.refresh_from_db()
    assert novedad.estado_novedad_id == en_atencion.id
    assert entry.estado_anterior_id == estado_inicial.id
    assert entry.estado_nuevo_id == en_atencion.id
    assert entry.observaciones == "Se atiende en sitio"
    assert HistorialEstadoNovedad.objects.filter(novedad=novedad).count() == 2


def test_same_status_is_an_annotation(novedad, estado_inicial, u1):
    entry = NovedadService.register_history(
        novedad_id=novedad.id,
        actor_user_id=u1.id,
        observaciones="Sin cambios",
        estado_nuevo_id=estado_inicial.id,
    )
    assert entry.estado_anterior_id == entry.estado_nuevo_id == estado_inicial.id


@pytest.mark.parametrize("notes", ["", "   ", None])
def test_notes_are_required(novedad, u1, notes):
    with pytest.raises(ValidationError):
        NovedadService.register_history(novedad_id=novedad.id, actor_user_id=u1.id, observaciones=notes)


def test_unknown_status_is_not_found(novedad, u1):
    with pytest.raises(NotFound):
        NovedadService.register_history(
            novedad_id=novedad.id,
            actor_user_id=u1.id,
            observaciones="x",
            estado_nuevo_id=999999,
        )


def test_dispatcher_rule_applies(novedad, u1, u2):
    NovedadService.assign_resources(novedad_id=novedad.id, actor_user_id=u1.id, data={})

    with pytest.raises(DispatcherOwnershipError):
        NovedadService.register_history(novedad_id=novedad.id, actor_user_id=u2.id, observaciones="x")
