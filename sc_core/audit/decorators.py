# sc_core/audit/decorators.py
from __future__ import annotations

import functools
from typing import Any, Callable

from django.http import QueryDict

from sc_core.audit.services import AuditService


def _payload(request) -> Any:
    data = getattr(request, "data", None)
    if isinstance(data, QueryDict):
        return data.dict()
    return data


def _novedad_id(response, kwargs) -> Any:
    if kwargs.get("pk") is not None:
        return kwargs["pk"]
    # create: the new incident is the response body
    data = getattr(response, "data", None)
    if isinstance(data, dict):
        body = data.get("data")
        if isinstance(body, dict):
            return body.get("id")
    return None


def audited(event_code: str) -> Callable:
    """
    Wrap a novedad ViewSet action: after a 2xx response, record
    {actor, action, novedad, payload, resulting status} in the audit trail.
    Services never write audit rows themselves.
    """

    def decorator(view_method: Callable) -> Callable:
        @functools.wraps(view_method)
        def wrapper(self, request, *args, **kwargs):
            response = view_method(self, request, *args, **kwargs)

            if 200 <= response.status_code < 300:
                novedad_id = _novedad_id(response, kwargs)
                if novedad_id is not None:
                    AuditService.log_action(
                        event_code=event_code,
                        novedad_id=novedad_id,
                        actor_user_id=getattr(request.user, "id", None),
                        action=getattr(self, "action", None),
                        method=request.method,
                        payload=_payload(request),
                    )
            return response

        return wrapper

    return decorator
