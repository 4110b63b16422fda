import pytest
from django.db import IntegrityError
from django.test import RequestFactory
from rest_framework.exceptions import NotFound

from sc_core.common.api.exceptions import (
    DispatcherOwnershipError,
    api_exception_handler,
    build_error_envelope,
)


def _ctx():
    return {"request": RequestFactory().get("/api/v1/novedades/")}


def test_build_error_envelope_shape():
    body = build_error_envelope(code="not_found", message="Nope")
    assert body["success"] is False
    assert body["message"] == "Nope"
    assert body["code"] == "not_found"
    assert body["errors"] is None
    assert body["request_id"]


def test_request_id_is_stable_per_request():
    ctx = _ctx()
    first = api_exception_handler(NotFound("x"), ctx)
    second = api_exception_handler(NotFound("y"), ctx)
    assert first.data["request_id"] == second.data["request_id"]


class _UniqueViolation(Exception):
    pass


def test_integrity_error_maps_to_409_with_driver_class():
    exc = IntegrityError("duplicate key value violates unique constraint")
    exc.__cause__ = _UniqueViolation()

    resp = api_exception_handler(exc, _ctx())

    assert resp.status_code == 409
    assert resp.data["code"] == "integrity_error"
    assert resp.data["message"] == "Duplicate value or invalid reference."
    assert resp.data["errors"] == {"driver_error": "_UniqueViolation"}


def test_dispatcher_error_code():
    resp = api_exception_handler(DispatcherOwnershipError(), _ctx())
    assert resp.status_code == 403
    assert resp.data["code"] == "dispatcher_mismatch"
    assert resp.data["errors"] is None


def test_unhandled_error_hides_details():
    resp = api_exception_handler(RuntimeError("secret"), _ctx())
    assert resp.status_code == 500
    assert resp.data["code"] == "server_error"
    assert "secret" not in resp.data["message"]
    assert resp.data["errors"] is None
