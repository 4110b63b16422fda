from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from sc_core.novedades.models import HistorialEstadoNovedad, Novedad
from sc_core.novedades.selectors import NovedadSelector
from sc_core.novedades.services import NovedadService

pytestmark = pytest.mark.django_db


def _history(novedad):
    return HistorialEstadoNovedad.objects.filter(novedad=novedad)


def test_creation_writes_exactly_one_entry(novedad):
    assert _history(novedad).count() == 1


def test_status_change_on_save_writes_one_entry(novedad, estados, estado_inicial, u2):
    en_sitio = estados["En Sitio"]

    novedad.estado_novedad = en_sitio
    novedad.updated_by = u2
    novedad.save()

    assert _history(novedad).count() == 2
    entry = _history(novedad).order_by("-id").first()
    assert entry.estado_anterior_id == estado_inicial.id
    assert entry.estado_nuevo_id == en_sitio.id
    assert entry.usuario_id == u2.id
    assert entry.created_by_id == u2.id
    assert entry.observaciones is None


def test_other_field_changes_do_not_write_history(novedad):
    novedad.descripcion = "Sin cambio de estado"
    novedad.save()

    assert _history(novedad).count() == 1


def test_save_with_update_fields_excluding_status_is_ignored(novedad, estados):
    novedad.estado_novedad = estados["En Sitio"]
    novedad.descripcion = "x"
    novedad.save(update_fields=["descripcion", "updated_at"])

    assert _history(novedad).count() == 1


def test_elapsed_minutes_since_previous_update(novedad, estados):
    Novedad.all_objects.filter(pk=novedad.pk).update(updated_at=timezone.now() - timedelta(minutes=45))

    novedad.refresh_from_db()
    novedad.estado_novedad = estados["En Camino"]
    novedad.save()

    entry = _history(novedad).order_by("-id").first()
    assert entry.tiempo_en_estado_min == 45


def test_actor_falls_back_to_registering_user(novedad, estados, u1):
    Novedad.all_objects.filter(pk=novedad.pk).update(updated_by=None)

    novedad.refresh_from_db()
    novedad.estado_novedad = estados["En Camino"]
    novedad.save()

    entry = _history(novedad).order_by("-id").first()
    assert entry.usuario_id == u1.id


def test_staged_notes_are_consumed_by_one_save(novedad, estados):
    novedad.stage_history(observaciones="Primera")
    novedad.estado_novedad = estados["En Camino"]
    novedad.save()

    novedad.estado_novedad = estados["En Sitio"]
    novedad.save()

    first, second = _history(novedad).order_by("id")[1:3]
    assert first.observaciones == "Primera"
    assert second.observaciones is None


def test_entries_are_append_only(novedad):
    entry = _history(novedad).get()

    entry.observaciones = "editado"
    with pytest.raises(ValidationError):
        entry.save()

    with pytest.raises(ValidationError):
        entry.delete()

    assert _history(novedad).get().observaciones != "editado"


def test_history_newest_first_and_chain_is_consistent(novedad, estados, estado_inicial, u1):
    # k = 3 logical status changes on top of creation
    NovedadService.assign_resources(
        novedad_id=novedad.id,
        actor_user_id=u1.id,
        data={"historial": {"observaciones": "Despacho"}},
    )
    NovedadService.update(novedad_id=novedad.id, actor_user_id=u1.id, data={"estado_novedad_id": estados["En Camino"].id})
    NovedadService.update(novedad_id=novedad.id, actor_user_id=u1.id, data={"estado_novedad_id": estados["En Sitio"].id})

    rows = list(NovedadSelector.list_history(novedad_id=novedad.id))
    assert len(rows) == 4

    assert rows[0].estado_nuevo_id == estados["En Sitio"].id
    assert rows[-1].estado_anterior_id is None
    assert rows[-1].estado_nuevo_id == estado_inicial.id

    chronological = list(reversed(rows))
    for prev, nxt in zip(chronological, chronological[1:]):
        assert nxt.estado_anterior_id == prev.estado_nuevo_id
