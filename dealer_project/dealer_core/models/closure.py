from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


# ---------- Monthly closure ----------
class MonthlyClosure(models.Model):
    """
    One finalized accounting month.
    Created by services.closing.close_month; restore_month lowers the
    counters, lists the restored division in reopened_divisions and deletes
    the row once no history rows of the period remain. A reopened division
    is open for postings until the next close_month of the period.
    """

    closure_month = models.PositiveSmallIntegerField()
    closure_year = models.PositiveSmallIntegerField()
    closure_date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )

    # rows moved into history, per kind
    total_pembelian_moved = models.PositiveIntegerField(default=0)
    total_penjualan_moved = models.PositiveIntegerField(default=0)
    total_pembukuan_moved = models.PositiveIntegerField(default=0)
    total_cicilan_moved = models.PositiveIntegerField(default=0)
    total_fee_moved = models.PositiveIntegerField(default=0)
    total_operational_moved = models.PositiveIntegerField(default=0)
    total_biro_jasa_moved = models.PositiveIntegerField(default=0)
    total_assets_moved = models.PositiveIntegerField(default=0)

    # divisions restored since the last close
    reopened_divisions = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "monthly_closures"
        ordering = ("-closure_year", "-closure_month")
        constraints = [
            # at most one closure per month
            models.UniqueConstraint(
                fields=["closure_month", "closure_year"],
                name="uq_monthly_closure_period",
            ),
            models.CheckConstraint(
                condition=models.Q(closure_month__gte=1) & models.Q(closure_month__lte=12),
                name="ck_monthly_closure_month_range",
            ),
        ]

    def __str__(self):
        return f"{self.closure_year}-{self.closure_month:02d}"

    @property
    def period_key(self):
        # "YYYY-MM", the format the closed-month picker works with
        return str(self)

    def clean(self):
        if not 1 <= (self.closure_month or 0) <= 12:
            raise ValidationError("closure_month must be between 1 and 12")
        unknown = set(self.reopened_divisions or ()) - set(settings.DEALER_DIVISIONS)
        if unknown:
            raise ValidationError(f"unknown divisions in reopened_divisions: {sorted(unknown)}")

    def is_open_for(self, division):
        return division in (self.reopened_divisions or ())
