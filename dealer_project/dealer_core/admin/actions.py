from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from dealer_core.services.closing import restore_month

# ---------- Admin actions ----------


def _restore_closures(modeladmin, request, queryset, division):
    """
    Restore each selected closure for one division.
    Every closure runs in its own transaction (restore_month opens one),
    so one failure does not undo the others.
    """
    success = 0
    failures = 0
    for closure in list(queryset):
        try:
            result = restore_month(closure.closure_month, closure.closure_year, division, user=request.user)
            success += 1
            moved = sum(result["records_restored"].values())
            modeladmin.message_user(
                request,
                _("Restored %(period)s (%(division)s): %(count)d rows") % {
                    "period": closure, "division": division, "count": moved,
                },
            )
        except ValidationError as exc:
            failures += 1
            modeladmin.message_user(
                request,
                _("Could not restore %(period)s: %(err)s") % {"period": closure, "err": "; ".join(exc.messages)},
                level=messages.ERROR,
            )

    # Final summary message
    modeladmin.message_user(
        request,
        _("Restored %(success)d closures for %(division)s. %(failures)d failed.") % {
            "success": success,
            "division": division,
            "failures": failures,
        },
        level=messages.SUCCESS if failures == 0 else messages.WARNING,
    )


""" One action per division: a restore always targets a concrete division. """


def make_restore_action(division):
    def restore_action(modeladmin, request, queryset):
        _restore_closures(modeladmin, request, queryset, division)

    restore_action.__name__ = f"restore_{division}"
    return admin.action(description=f"Restore selected months (division {division})")(restore_action)
