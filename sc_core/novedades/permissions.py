# sc_core/novedades/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission


class NovedadPermission(BasePermission):
    """
    Django model permissions per ViewSet action.

    - Superusers pass every gate.
    - `en_atencion` only needs an authenticated user.
    - `historial` maps GET and POST to different permissions.
    - Unknown action => deny.
    """

    message = "No tiene permiso para realizar esta acción."

    required_perms_per_action = {
        "list": "novedades.view_novedad",
        "retrieve": "novedades.view_novedad",
        "create": "novedades.add_novedad",
        "update": "novedades.change_novedad",
        "partial_update": "novedades.change_novedad",
        "destroy": "novedades.delete_novedad",
        "asignar": "novedades.asignar_recursos",
    }

    history_perms_per_method = {
        "GET": "novedades.view_historialestadonovedad",
        "POST": "novedades.add_historialestadonovedad",
    }

    def _required_perm(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action == "historial":
            return self.history_perms_per_method.get(request.method.upper())
        return self.required_perms_per_action.get(action)

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        if getattr(user, "is_superuser", False):
            return True

        if getattr(view, "action", None) == "en_atencion":
            return True

        perm = self._required_perm(request, view)
        if perm is None:
            return False
        return user.has_perm(perm)
