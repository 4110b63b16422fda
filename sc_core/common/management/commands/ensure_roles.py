# sc_core/common/management/commands/ensure_roles.py

from django.contrib.auth.models import Group, Permission
from django.core.management.base import BaseCommand, CommandError


NOVEDAD_READ = [
    "novedades.view_novedad",
    "novedades.view_historialestadonovedad",
]
NOVEDAD_OPERATE = NOVEDAD_READ + [
    "novedades.add_novedad",
    "novedades.change_novedad",
    "novedades.asignar_recursos",
    "novedades.add_historialestadonovedad",
]

# Group name -> permissions ("app_label.codename"); "*" means every
# permission of the listed apps.
ROLE_PERMISSIONS = {
    "super_admin": ["*"],
    "supervisor": NOVEDAD_OPERATE + [
        "novedades.delete_novedad",
        "audit.view_auditevent",
        "catalogs.view_estadonovedad",
    ],
    "operador": NOVEDAD_OPERATE + ["catalogs.view_estadonovedad"],
    "consulta": NOVEDAD_READ + ["catalogs.view_estadonovedad"],
}

DOMAIN_APPS = ["catalogs", "resources", "novedades", "audit"]


def _resolve(perm: str) -> Permission:
    app_label, codename = perm.split(".", 1)
    try:
        return Permission.objects.get(content_type__app_label=app_label, codename=codename)
    except Permission.DoesNotExist:
        raise CommandError(f"Permission {perm} does not exist. Run migrate first.")


class Command(BaseCommand):
    help = "Ensure default role groups exist with their permissions (idempotent)."

    def handle(self, *args, **options):
        created = 0
        for name, perms in ROLE_PERMISSIONS.items():
            group, was_created = Group.objects.get_or_create(name=name)
            created += 1 if was_created else 0

            if perms == ["*"]:
                resolved = list(Permission.objects.filter(content_type__app_label__in=DOMAIN_APPS))
            else:
                resolved = [_resolve(p) for p in perms]
            group.permissions.set(resolved)

        self.stdout.write(self.style.SUCCESS(f"Roles ensured. Newly created: {created}"))
