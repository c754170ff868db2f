import logging

from ..models import AuditLog

logger = logging.getLogger(__name__)


def log_action(
    *,
    action: str,
    instance,
    user=None,
    changes: dict | None = None,
):
    """
    Central audit logger.
    Safe to call multiple times (caller ensures idempotency).
    """
    # anonymous users and ids coming from tasks are stored as "no user"
    if user is not None and not getattr(user, "is_authenticated", False):
        user = None

    entry = AuditLog.objects.create(
        user=user,
        action=action,
        object_type=instance.__class__.__name__,
        object_id=str(instance.pk),
        changes=changes,
    )
    logger.debug("audit %s %s(%s)", action, entry.object_type, entry.object_id)
    return entry
