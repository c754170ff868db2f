from decimal import Decimal

from django.db import models

from .base import ClosedPeriodModel, DivisionModel


class PurchaseStatus(models.TextChoices):
    READY = "ready", "Ready"
    BOOKED = "booked", "Booked"
    SOLD = "sold", "Sold"


# ---------- Purchase (pembelian) ----------
class PurchaseFields(DivisionModel):
    """A motorcycle bought into stock."""

    branch = models.ForeignKey("dealer_core.Branch", on_delete=models.PROTECT, related_name="+")
    brand = models.ForeignKey("dealer_core.Brand", on_delete=models.PROTECT, related_name="+")
    motor_type = models.ForeignKey("dealer_core.MotorType", on_delete=models.PROTECT, related_name="+")
    # company whose modal paid for the unit
    source_company = models.ForeignKey(
        "dealer_core.Company", on_delete=models.PROTECT, related_name="+",
        null=True, blank=True,
    )

    plate_number = models.CharField(max_length=20)
    model_year = models.PositiveSmallIntegerField()
    color = models.CharField(max_length=40, blank=True)
    mileage = models.PositiveIntegerField(default=0)

    purchase_date = models.DateField(db_index=True)
    tax_date = models.DateField(null=True, blank=True)

    purchase_price = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    # purchase price plus reconditioning costs, set when prices are revised
    final_price = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)

    status = models.CharField(max_length=20, choices=PurchaseStatus.choices, default=PurchaseStatus.READY)
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.plate_number} ({self.purchase_date})"


class Purchase(PurchaseFields):
    class Meta:
        db_table = "pembelian"
        indexes = [models.Index(fields=["division", "status", "purchase_date"], name="ix_pembelian_div_status_date")]


class PurchaseHistory(ClosedPeriodModel, PurchaseFields):
    class Meta:
        db_table = "pembelian_history"
        verbose_name_plural = "purchase history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_pembelian_history_source"),
        ]
