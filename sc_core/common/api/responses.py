# sc_core/common/api/responses.py
from __future__ import annotations

from typing import Any

from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(data: Any = None, *, message: str = "", status: int = http_status.HTTP_200_OK, **extra) -> Response:
    """
    Success envelope: {"success": true, "message": ..., "data": ...}.
    `data` is omitted entirely when None (e.g. delete acknowledgements).
    """
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return Response(body, status=status)
