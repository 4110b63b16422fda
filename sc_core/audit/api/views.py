# sc_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from sc_core.audit.api.serializers import AuditEventSerializer
from sc_core.audit.models import AuditEvent
from sc_core.audit.selectors import list_audit_events
from sc_core.common.api.responses import success_response


class AuditEventViewSet(viewsets.GenericViewSet):
    """
    List audit events, newest first.
    """
    permission_classes = [IsAuthenticated]

    serializer_class = AuditEventSerializer
    queryset = AuditEvent.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditEventSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="entity_type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by entity type (always Novedad today).",
            ),
            OpenApiParameter(
                name="entity_id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by entity id.",
            ),
            OpenApiParameter(
                name="novedad_code",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by incident code (e.g. 000042).",
            ),
            OpenApiParameter(
                name="event_code",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by event code (e.g. novedad.created, novedad.asignar).",
            ),
            OpenApiParameter(
                name="actor_user_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by actor user id (int).",
            ),
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Max records to return (default 200, max 500).",
            ),
        ],
    )
    def list(self, request):
        actor_user_raw = request.query_params.get("actor_user_id")

        actor_user_id = None
        if actor_user_raw is not None and actor_user_raw != "":
            try:
                actor_user_id = int(actor_user_raw)
            except ValueError:
                raise ValidationError({"actor_user_id": "Invalid actor_user_id (int expected)."})

        qs = list_audit_events(
            entity_type=request.query_params.get("entity_type") or None,
            entity_id=request.query_params.get("entity_id") or None,
            novedad_code=request.query_params.get("novedad_code") or None,
            event_code=request.query_params.get("event_code") or None,
            actor_user_id=actor_user_id,
        )

        # timeline endpoints can get huge
        limit = request.query_params.get("limit")
        try:
            limit_n = int(limit) if limit else 200
        except ValueError:
            limit_n = 200
        limit_n = max(1, min(limit_n, 500))

        return success_response(AuditEventSerializer(qs[:limit_n], many=True).data, message="Eventos de auditoría")
