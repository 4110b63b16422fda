import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from sc_core.novedades.constants import Turno
from sc_core.novedades.models import HistorialEstadoNovedad, Novedad

pytestmark = pytest.mark.django_db

BASE = "/api/v1/novedades/"


def _create_payload(tipo, subtipo, **extra):
    payload = {
        "tipo_novedad_id": tipo.id,
        "subtipo_novedad_id": subtipo.id,
        "fecha_hora_ocurrencia": "2025-01-01T09:00:00",
        "localizacion": "Av. Grau 123",
    }
    payload.update(extra)
    return payload


def test_end_to_end_dispatch_scenario(client_u1, client_u2, estado_inicial, estado_despachado, tipo, subtipo, vehiculo, u1):
    # Create
    resp = client_u1.post(BASE, _create_payload(tipo, subtipo), format="json")
    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["success"] is True
    created = body["data"]
    assert created["novedad_code"] == "000001"
    assert created["turno"] == Turno.MANANA
    assert created["prioridad_actual"] == "ALTA"
    assert created["estado_novedad"]["id"] == estado_inicial.id
    assert created["tipo_novedad"]["nombre"] == tipo.nombre
    novedad_id = created["id"]
    assert HistorialEstadoNovedad.objects.filter(novedad_id=novedad_id).count() == 1

    # Dispatch by U1
    resp = client_u1.post(
        f"{BASE}{novedad_id}/asignar/",
        {
            "vehiculo_id": vehiculo.id,
            "estado_novedad_id": estado_despachado.id,
            "historial": {"observaciones": "Móvil 10 en camino"},
        },
        format="json",
    )
    assert resp.status_code == 200, resp.content
    data = resp.json()["data"]
    assert data["usuario_despacho_id"] == u1.id
    assert data["usuario_despacho_nombre"] == "U1"
    assert data["fecha_despacho"] is not None
    assert data["estado_novedad"]["id"] == estado_despachado.id
    assert data["vehiculo"]["placa"] == vehiculo.placa

    resp = client_u1.get(f"{BASE}{novedad_id}/historial/")
    assert resp.status_code == 200
    rows = resp.json()["data"]
    assert len(rows) == 2
    assert rows[0]["estado_anterior_id"] == estado_inicial.id
    assert rows[0]["estado_nuevo_id"] == estado_despachado.id
    assert rows[0]["observaciones"] == "Móvil 10 en camino"
    assert rows[0]["estado_nuevo"]["nombre"] == estado_despachado.nombre
    assert rows[0]["usuario_nombre"] == "U1"

    # Update by U2 is rejected
    resp = client_u2.patch(f"{BASE}{novedad_id}/", {"descripcion": "intento"}, format="json")
    assert resp.status_code == 403
    err = resp.json()
    assert err["success"] is False
    assert err["code"] == "dispatcher_mismatch"
    assert err["request_id"]


def test_create_validation_error_envelope(client_u1, estados):
    resp = client_u1.post(BASE, {"fecha_hora_ocurrencia": "no-es-fecha"}, format="json")

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["code"] == "validation_error"
    assert "tipo_novedad_id" in body["errors"]
    assert "fecha_hora_ocurrencia" in body["errors"]


def test_report_timestamp_cannot_be_set_by_client(client_u1, estados, tipo, subtipo):
    before = timezone.now()
    forged = "2020-01-01T09:00:00-05:00"

    resp = client_u1.post(BASE, _create_payload(tipo, subtipo, fecha_hora_reporte=forged), format="json")
    assert resp.status_code == 201
    novedad = Novedad.objects.get(pk=resp.json()["data"]["id"])
    assert before <= novedad.fecha_hora_reporte <= timezone.now()

    stored = novedad.fecha_hora_reporte
    resp = client_u1.patch(f"{BASE}{novedad.id}/", {"fecha_hora_reporte": forged}, format="json")
    assert resp.status_code == 200
    novedad.refresh_from_db()
    assert novedad.fecha_hora_reporte == stored


def test_create_unknown_subtipo_is_404(client_u1, estados, tipo):
    resp = client_u1.post(BASE, {"tipo_novedad_id": tipo.id, "subtipo_novedad_id": 999999}, format="json")

    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_create_without_initial_status_is_500(client_u1, estados, tipo, subtipo):
    estados["Pendiente De Registro"].delete()

    resp = client_u1.post(BASE, _create_payload(tipo, subtipo), format="json")

    assert resp.status_code == 500
    assert resp.json()["code"] == "configuration_error"


def test_list_is_paginated(client_u1, novedad):
    resp = client_u1.get(BASE, {"limit": 10})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert [n["id"] for n in body["data"]] == [novedad.id]
    assert body["pagination"] == {"total": 1, "page": 1, "limit": 10, "totalPages": 1}


def test_retrieve_and_soft_delete(client_u1, admin_user, novedad):
    resp = client_u1.get(f"{BASE}{novedad.id}/")
    assert resp.status_code == 200
    assert resp.json()["data"]["novedad_code"] == novedad.novedad_code

    # operador has no delete permission
    resp = client_u1.delete(f"{BASE}{novedad.id}/")
    assert resp.status_code == 403
    assert resp.json()["code"] == "permission_denied"

    admin = APIClient()
    admin.force_authenticate(user=admin_user)
    resp = admin.delete(f"{BASE}{novedad.id}/")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Novedad eliminada exitosamente"}

    assert client_u1.get(f"{BASE}{novedad.id}/").status_code == 404
    assert admin.delete(f"{BASE}{novedad.id}/").status_code == 404

    # history stays readable
    resp = client_u1.get(f"{BASE}{novedad.id}/historial/")
    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 1
    assert Novedad.all_objects.get(pk=novedad.pk).deleted_by_id == admin_user.id


def test_history_of_unknown_novedad_is_404(client_u1, estados):
    assert client_u1.get(f"{BASE}999999/historial/").status_code == 404


def test_manual_history_entry(client_u1, novedad, estados):
    resp = client_u1.post(f"{BASE}{novedad.id}/historial/", {"observaciones": ""}, format="json")
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"

    resp = client_u1.post(
        f"{BASE}{novedad.id}/historial/",
        {"observaciones": "Se llega al lugar", "estado_nuevo_id": estados["En Sitio"].id},
        format="json",
    )
    assert resp.status_code == 201, resp.content
    entry = resp.json()["data"]
    assert entry["estado_nuevo_id"] == estados["En Sitio"].id
    assert entry["observaciones"] == "Se llega al lugar"


def test_update_response_time_via_api(client_u1, novedad):
    resp = client_u1.patch(
        f"{BASE}{novedad.id}/",
        {"fecha_llegada": "2025-01-01T09:37:00"},
        format="json",
    )
    assert resp.status_code == 200, resp.content
    assert resp.json()["data"]["tiempo_respuesta_min"] == 37


def test_en_atencion_lists_dispatched(client_consulta, client_u1, novedad):
    assert client_consulta.get(f"{BASE}en-atencion/").json()["data"] == []

    client_u1.post(f"{BASE}{novedad.id}/asignar/", {}, format="json")

    resp = client_consulta.get(f"{BASE}en-atencion/")
    assert resp.status_code == 200
    assert [n["id"] for n in resp.json()["data"]] == [novedad.id]


def test_read_only_role_gates(client_consulta, novedad, tipo, subtipo):
    assert client_consulta.get(BASE).status_code == 200
    assert client_consulta.get(f"{BASE}{novedad.id}/historial/").status_code == 200

    assert client_consulta.post(BASE, _create_payload(tipo, subtipo), format="json").status_code == 403
    assert client_consulta.patch(f"{BASE}{novedad.id}/", {}, format="json").status_code == 403
    assert client_consulta.post(f"{BASE}{novedad.id}/asignar/", {}, format="json").status_code == 403
    assert client_consulta.post(f"{BASE}{novedad.id}/historial/", {"observaciones": "x"}, format="json").status_code == 403


def test_user_without_groups_is_denied(db, django_user_model, novedad):
    user = django_user_model.objects.create_user(username="sin_rol", password="pass123")
    c = APIClient()
    c.force_authenticate(user=user)

    resp = c.get(BASE)
    assert resp.status_code == 403
    assert resp.json()["code"] == "permission_denied"


def test_unauthenticated_is_rejected(estados):
    resp = APIClient().get(BASE)
    assert resp.status_code == 401
    assert resp.json()["code"] == "not_authenticated"
