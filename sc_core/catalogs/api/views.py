# sc_core/catalogs/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from sc_core.catalogs.api.serializers import EstadoNovedadSerializer
from sc_core.catalogs.models import EstadoNovedad
from sc_core.catalogs.selectors import StatusCatalog
from sc_core.common.api.responses import success_response


class EstadoNovedadViewSet(viewsets.GenericViewSet):
    """
    Active status catalog, ordered by flow position.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = EstadoNovedadSerializer
    queryset = EstadoNovedad.objects.none()

    @extend_schema(tags=["Catálogos"], responses={200: EstadoNovedadSerializer(many=True)})
    def list(self, request):
        data = EstadoNovedadSerializer(StatusCatalog.list_active(), many=True).data
        return success_response(data, message="Estados obtenidos")
