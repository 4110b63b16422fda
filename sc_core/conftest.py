# sc_core/conftest.py
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management import call_command
from rest_framework.test import APIClient

from sc_core.catalogs.models import EstadoNovedad, Prioridad, SubtipoNovedad, TipoNovedad
from sc_core.resources.models import PersonalSeguridad, UnidadOficina, Vehiculo
from sc_core.tests.helpers import local_dt


@pytest.fixture
def estados(db):
    call_command("seed_estados", stdout=StringIO())
    return {e.nombre: e for e in EstadoNovedad.objects.all()}


@pytest.fixture
def estado_inicial(estados):
    return estados["Pendiente De Registro"]


@pytest.fixture
def estado_despachado(estados):
    # First name of NOVEDADES_DISPATCH_STATUS_NAMES present in the seeded catalog.
    return estados["Asignado"]


@pytest.fixture
def tipo(db):
    return TipoNovedad.objects.create(nombre="Robo")


@pytest.fixture
def subtipo(tipo):
    return SubtipoNovedad.objects.create(
        tipo_novedad=tipo,
        nombre="Robo a mano armada",
        prioridad=Prioridad.ALTA,
        tiempo_respuesta_min=10,
    )


@pytest.fixture
def subtipo_sin_prioridad(tipo):
    return SubtipoNovedad.objects.create(tipo_novedad=tipo, nombre="Hurto menor", prioridad="")


@pytest.fixture
def unidad(db):
    return UnidadOficina.objects.create(nombre="Serenazgo Norte", codigo="UN-01")


@pytest.fixture
def vehiculo(db):
    return Vehiculo.objects.create(codigo_vehiculo="MOV-10", placa="EGA-101")


@pytest.fixture
def otro_vehiculo(db):
    return Vehiculo.objects.create(codigo_vehiculo="MOV-11", placa="EGA-102")


@pytest.fixture
def agente(db):
    return PersonalSeguridad.objects.create(
        nombres="Ana",
        apellido_paterno="Quispe",
        apellido_materno="Rojas",
        doc_numero="44556677",
    )


@pytest.fixture
def roles(db):
    call_command("ensure_roles", stdout=StringIO())
    return {g.name: g for g in Group.objects.all()}


def _operador(username, roles):
    User = get_user_model()
    user = User.objects.create_user(username=username, password="pass123", first_name=username.upper())
    user.groups.add(roles["operador"])
    return user


@pytest.fixture
def u1(roles):
    return _operador("u1", roles)


@pytest.fixture
def u2(roles):
    return _operador("u2", roles)


@pytest.fixture
def consulta_user(roles):
    User = get_user_model()
    user = User.objects.create_user(username="lector", password="pass123")
    user.groups.add(roles["consulta"])
    return user


@pytest.fixture
def admin_user(db):
    User = get_user_model()
    return User.objects.create_superuser(username="admin", password="pass123", email="admin@example.com")


def _client_for(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def client_u1(u1):
    return _client_for(u1)


@pytest.fixture
def client_u2(u2):
    return _client_for(u2)


@pytest.fixture
def client_consulta(consulta_user):
    return _client_for(consulta_user)


@pytest.fixture
def api_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def novedad(estados, tipo, subtipo, u1):
    from sc_core.novedades.services import NovedadService

    return NovedadService.create(
        actor_user_id=u1.id,
        tipo_novedad_id=tipo.id,
        subtipo_novedad_id=subtipo.id,
        fecha_hora_ocurrencia=local_dt(2025, 1, 1, 9, 0),
        localizacion="Av. Grau 123",
        descripcion="Asalto en la vía pública",
    )
