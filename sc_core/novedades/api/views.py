# sc_core/novedades/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound

from sc_core.audit.constants import NovedadAuditEvent
from sc_core.audit.decorators import audited
from sc_core.common.api.pagination import paginate
from sc_core.common.api.responses import success_response
from sc_core.novedades.api.serializers import (
    AsignarRecursosSerializer,
    HistorialCreateSerializer,
    HistorialEstadoNovedadSerializer,
    NovedadCreateSerializer,
    NovedadSerializer,
    NovedadUpdateSerializer,
)
from sc_core.novedades.permissions import NovedadPermission
from sc_core.novedades.selectors import NovedadSelector
from sc_core.novedades.services import NovedadService


LIST_PARAMETERS = [
    OpenApiParameter("fecha_inicio", OpenApiTypes.DATETIME, OpenApiParameter.QUERY, required=False,
                     description="Occurrence from (inclusive)."),
    OpenApiParameter("fecha_fin", OpenApiTypes.DATETIME, OpenApiParameter.QUERY, required=False,
                     description="Occurrence until (inclusive)."),
    OpenApiParameter("estado_novedad_id", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
    OpenApiParameter("prioridad_actual", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                     enum=["ALTA", "MEDIA", "BAJA"]),
    OpenApiParameter("sector_id", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
    OpenApiParameter("tipo_novedad_id", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
    OpenApiParameter("search", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                     description="Code, description, location or reporter name."),
    OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
    OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
]


class NovedadViewSet(viewsets.ViewSet):
    """
    Thin API layer:
    - input validation via serializers
    - calls selectors for reads
    - calls services for writes
    - audit trail around mutating actions
    """

    permission_classes = [NovedadPermission]
    lookup_value_regex = r"\d+"

    def _get_object(self, pk):
        try:
            return NovedadSelector.get_active(novedad_id=pk)
        except NovedadSelector.NotFound:
            raise NotFound("Novedad no encontrada.")

    def _detail_data(self, novedad_id):
        return NovedadSerializer(self._get_object(novedad_id)).data

    # ----------------------------
    # Reads
    # ----------------------------
    @extend_schema(tags=["Novedades"], parameters=LIST_PARAMETERS, responses={200: NovedadSerializer(many=True)})
    def list(self, request):
        qs = NovedadSelector.list_active(params=request.query_params)
        return paginate(request, qs, NovedadSerializer, message="Novedades obtenidas")

    @extend_schema(tags=["Novedades"], responses={200: NovedadSerializer})
    def retrieve(self, request, pk=None):
        return success_response(self._detail_data(pk), message="Novedad obtenida")

    @extend_schema(tags=["Novedades"], responses={200: NovedadSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="en-atencion")
    def en_atencion(self, request):
        qs = NovedadSelector.list_in_attention()
        return paginate(request, qs, NovedadSerializer, message="Novedades en atención")

    # ----------------------------
    # Lifecycle
    # ----------------------------
    @extend_schema(tags=["Novedades"], request=NovedadCreateSerializer, responses={201: NovedadSerializer})
    @audited(NovedadAuditEvent.CREATED)
    def create(self, request):
        ser = NovedadCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        novedad = NovedadService.create(actor_user_id=request.user.id, **ser.validated_data)

        return success_response(
            self._detail_data(novedad.id),
            message="Novedad creada exitosamente",
            status=status.HTTP_201_CREATED,
        )

    def _update(self, request, pk):
        ser = NovedadUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        novedad = NovedadService.update(novedad_id=pk, actor_user_id=request.user.id, data=ser.validated_data)
        return success_response(self._detail_data(novedad.id), message="Novedad actualizada exitosamente")

    @extend_schema(tags=["Novedades"], request=NovedadUpdateSerializer, responses={200: NovedadSerializer})
    @audited(NovedadAuditEvent.UPDATED)
    def update(self, request, pk=None):
        return self._update(request, pk)

    @extend_schema(tags=["Novedades"], request=NovedadUpdateSerializer, responses={200: NovedadSerializer})
    @audited(NovedadAuditEvent.UPDATED)
    def partial_update(self, request, pk=None):
        return self._update(request, pk)

    @extend_schema(tags=["Novedades"], responses={200: None})
    @audited(NovedadAuditEvent.DELETED)
    def destroy(self, request, pk=None):
        NovedadService.soft_delete(novedad_id=pk, actor_user_id=request.user.id)
        return success_response(message="Novedad eliminada exitosamente")

    # ----------------------------
    # Dispatch
    # ----------------------------
    @extend_schema(tags=["Novedades"], request=AsignarRecursosSerializer, responses={200: NovedadSerializer})
    @action(detail=True, methods=["post"])
    @audited(NovedadAuditEvent.ASIGNAR)
    def asignar(self, request, pk=None):
        ser = AsignarRecursosSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        novedad = NovedadService.assign_resources(
            novedad_id=pk,
            actor_user_id=request.user.id,
            data=ser.validated_data,
        )
        return success_response(self._detail_data(novedad.id), message="Recursos asignados exitosamente")

    # ----------------------------
    # Status history
    # ----------------------------
    @extend_schema(
        tags=["Novedades"],
        methods=["GET"],
        responses={200: HistorialEstadoNovedadSerializer(many=True)},
    )
    @extend_schema(
        tags=["Novedades"],
        methods=["POST"],
        request=HistorialCreateSerializer,
        responses={201: HistorialEstadoNovedadSerializer},
    )
    @action(detail=True, methods=["get", "post"])
    def historial(self, request, pk=None):
        if request.method == "POST":
            return self._registrar_historial(request, pk=pk)

        # Soft-deleted incidents keep a readable history.
        if not NovedadSelector.exists_any(novedad_id=pk):
            raise NotFound("Novedad no encontrada.")

        qs = NovedadSelector.list_history(novedad_id=pk)
        return success_response(
            HistorialEstadoNovedadSerializer(qs, many=True).data,
            message="Historial obtenido",
        )

    @audited(NovedadAuditEvent.HISTORIAL)
    def _registrar_historial(self, request, pk=None):
        ser = HistorialCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        entry = NovedadService.register_history(
            novedad_id=pk,
            actor_user_id=request.user.id,
            observaciones=ser.validated_data.get("observaciones", ""),
            estado_nuevo_id=ser.validated_data.get("estado_nuevo_id"),
            metadata=ser.validated_data.get("metadata"),
        )
        return success_response(
            HistorialEstadoNovedadSerializer(entry).data,
            message="Historial registrado exitosamente",
            status=status.HTTP_201_CREATED,
        )
