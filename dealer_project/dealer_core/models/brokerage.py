from decimal import Decimal

from django.db import models

from .base import ClosedPeriodModel, DivisionModel


class BrokerageStatus(models.TextChoices):
    IN_PROGRESS = "dalam proses", "Dalam Proses"
    DONE = "selesai", "Selesai"


# ---------- Service brokerage job (biro jasa) ----------
class BrokerageJobFields(DivisionModel):
    """Vehicle paperwork handled on behalf of a customer (STNK, BPKB, ...)."""

    date = models.DateField(db_index=True)  # tanggal
    service_type = models.CharField(max_length=120)  # jenis_pengurusan
    plate_number = models.CharField(max_length=20, blank=True)
    brand_name = models.CharField(max_length=120, blank=True)
    motor_type_name = models.CharField(max_length=120, blank=True)
    estimated_finish = models.DateField(null=True, blank=True)

    estimated_cost = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    down_payment = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    total_paid = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    remaining = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    capital_cost = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))  # biaya_modal
    profit = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)

    destination_company = models.ForeignKey(
        "dealer_core.Company", on_delete=models.PROTECT, related_name="+",
        null=True, blank=True,
    )
    status = models.CharField(
        max_length=20, choices=BrokerageStatus.choices, default=BrokerageStatus.IN_PROGRESS
    )
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.service_type} {self.plate_number}".strip()


class BrokerageJob(BrokerageJobFields):
    class Meta:
        db_table = "biro_jasa"


class BrokerageJobHistory(ClosedPeriodModel, BrokerageJobFields):
    class Meta:
        db_table = "biro_jasa_history"
        verbose_name_plural = "brokerage job history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_biro_jasa_history_source"),
        ]
