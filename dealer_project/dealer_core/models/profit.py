from decimal import Decimal

from django.db import models
from django.utils import timezone


class ProfitAdjustment(models.Model):
    """
    Profit deduction booked by a "Kurang Profit" operational posting,
    or the restoration that reverses it.
    """

    TYPE_CHOICES = [
        ("deduction", "Deduction"),
        ("restoration", "Restoration"),
    ]
    STATUS_CHOICES = [
        ("active", "Active"),
        ("reversed", "Reversed"),
    ]

    operational_id = models.BigIntegerField(db_index=True)
    date = models.DateField()  # month the profit is taken from
    division = models.CharField(max_length=20, db_index=True)
    category = models.CharField(max_length=80)
    description = models.CharField(max_length=400, blank=True)
    amount = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    adjustment_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default="deduction")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "profit_adjustments"
        ordering = ("-created_at", "-id")
        indexes = [models.Index(fields=["division", "date"], name="ix_profit_adj_div_date")]

    def __str__(self):
        return f"{self.adjustment_type} {self.amount} (op {self.operational_id})"
