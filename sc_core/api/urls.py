# sc_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from sc_core.audit.api.views import AuditEventViewSet
from sc_core.catalogs.api.views import EstadoNovedadViewSet
from sc_core.novedades.api.views import NovedadViewSet

router = DefaultRouter()

router.register(r"novedades", NovedadViewSet, basename="novedades")
router.register(r"estados-novedad", EstadoNovedadViewSet, basename="estados-novedad")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    # Auth (JWT)
    path("auth/login/", TokenObtainPairView.as_view(), name="login"),
    path("auth/refresh/", TokenRefreshView.as_view(), name="refresh"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
