from django.conf import settings
from django.db import models


# ---------- Audit / Event log ----------
class AuditLog(models.Model):  # accountability across closing, modal and posting workflows
    # Which user performed the action
    # (nullable for management commands and background tasks)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    # Common choices: close_month, restore_month, modal_adjust, ...
    action = models.CharField(max_length=50)
    # e.g. "MonthlyClosure", "Company", "Installment"
    object_type = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    # Before/after details in JSON format
    changes = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["object_type", "object_id"], name="ix_auditlog_object"),
            models.Index(fields=["created_at"], name="ix_auditlog_created"),
        ]

    def __str__(self):
        return f"[{self.created_at:%Y-%m-%d %H:%M}] {self.user} {self.action} {self.object_type}({self.object_id})"
