# sc_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope. Shares `success`/`message` with the success
    envelope so clients can branch on a single flag.
    """
    rid = ensure_request_id(request)
    return {
        "success": False,
        "message": message,
        "code": code,
        "errors": details,
        "request_id": rid,
    }


class ConfigurationError(APIException):
    """
    Deployment/seed problem the request cannot recover from (e.g. no initial
    status in the catalog). Retrying will not help.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server configuration error."
    default_code = "configuration_error"


class DispatcherOwnershipError(PermissionDenied):
    default_detail = "Only the user who dispatched this incident can modify it."
    default_code = "dispatcher_mismatch"


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, DispatcherOwnershipError):
        return DispatcherOwnershipError.default_code
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, (Http404, NotFound)):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def _integrity_response(exc: IntegrityError, request) -> Response:
    # Driver-native class, e.g. UniqueViolation / ForeignKeyViolation on psycopg.
    cause = exc.__cause__ or exc
    return Response(
        build_error_envelope(
            request=request,
            code="integrity_error",
            message="Duplicate value or invalid reference.",
            details={"driver_error": type(cause).__name__},
        ),
        status=status.HTTP_409_CONFLICT,
    )


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error: %s", exc)
        return _integrity_response(exc, request)

    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception("Unhandled error", exc_info=exc)
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message="Unexpected server error.",
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    data = response.data

    # Message + details rules:
    # 1) {"detail": "..."} only -> message=detail, details=None
    # 2) {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) Otherwise -> message="Request failed.", details=data (field-level errors)
    message = "Request failed."
    details = data

    if isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=details,
        ),
        status=http_status,
        headers=response.headers,
    )
