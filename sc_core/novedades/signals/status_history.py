# sc_core/novedades/signals/status_history.py
"""
Status-change hook for Novedad.

Fires on UPDATE only (creation writes its own entry) and only when the stored
`estado_novedad_id` actually changes. This is the single writer of
status-change rows; write paths that know more about the change (dispatch,
manual history) attach their notes/overrides with `Novedad.stage_history()`
before saving instead of writing a second row.

Receivers run inside the caller's transaction, so a failure here rolls the
status change back too. QuerySet.update() bypasses signals and must not be
used to change `estado_novedad`.
"""
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone

from sc_core.novedades.history import append_history
from sc_core.novedades.models import Novedad
from sc_core.novedades.rules import whole_minutes_between


@receiver(pre_save, sender=Novedad)
def novedad_pre_save(sender, instance: Novedad, raw=False, **kwargs):
    if raw or instance._state.adding or not instance.pk:
        instance._pre_save_snapshot = None
        return
    instance._pre_save_snapshot = (
        Novedad.all_objects.filter(pk=instance.pk)
        .values("estado_novedad_id", "updated_at")
        .first()
    )


@receiver(post_save, sender=Novedad)
def novedad_post_save(sender, instance: Novedad, created: bool, raw=False, update_fields=None, **kwargs):
    staged = instance.pop_staged_history()
    prev = getattr(instance, "_pre_save_snapshot", None)
    instance._pre_save_snapshot = None

    if created or raw or not prev:
        return

    if update_fields is not None and not {"estado_novedad", "estado_novedad_id"} & set(update_fields):
        return

    if prev["estado_novedad_id"] == instance.estado_novedad_id:
        return

    actor_id = instance.updated_by_id or instance.usuario_registro_id
    changed_at = timezone.now()

    append_history(
        novedad=instance,
        estado_anterior_id=staged.get("estado_anterior_id", prev["estado_novedad_id"]),
        estado_nuevo_id=staged.get("estado_nuevo_id", instance.estado_novedad_id),
        usuario_id=actor_id,
        tiempo_en_estado_min=staged.get(
            "tiempo_en_estado_min",
            whole_minutes_between(prev["updated_at"], changed_at),
        ),
        observaciones=staged.get("observaciones"),
        metadata=staged.get("metadata"),
        created_by_id=staged.get("created_by", actor_id),
        updated_by_id=staged.get("updated_by", actor_id),
        fecha_cambio=changed_at,
    )
