from decimal import Decimal

from django.db import models

from .base import ClosedPeriodModel, DivisionModel


class SaleStatus(models.TextChoices):
    BOOKED = "booked", "Booked"
    SOLD = "sold", "Sold"
    CANCELLED = "cancelled", "Cancelled"


class InstallmentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"


# ---------- Sale (penjualan) ----------
class SaleFields(DivisionModel):
    PAYMENT_CHOICES = [
        ("cash", "Cash"),
        ("cash_bertahap", "Cash bertahap"),
        ("kredit", "Kredit"),
    ]

    branch = models.ForeignKey("dealer_core.Branch", on_delete=models.PROTECT, related_name="+")
    brand = models.ForeignKey("dealer_core.Brand", on_delete=models.PROTECT, related_name="+")
    motor_type = models.ForeignKey("dealer_core.MotorType", on_delete=models.PROTECT, related_name="+")
    # company receiving the payment
    company = models.ForeignKey("dealer_core.Company", on_delete=models.PROTECT, related_name="+")

    # The purchase may already sit in its history table, so the link
    # is a plain id instead of a foreign key
    purchase_id = models.BigIntegerField(db_index=True)

    plate_number = models.CharField(max_length=20)
    sale_date = models.DateField(db_index=True)
    payment_type = models.CharField(max_length=20, choices=PAYMENT_CHOICES, default="cash")

    purchase_price = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    sale_price = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    down_payment = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    # still owed by the buyer (sisa_bayar); installments reduce it
    remaining = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    profit = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)

    status = models.CharField(max_length=20, choices=SaleStatus.choices, default=SaleStatus.BOOKED)
    paid_off_date = models.DateField(null=True, blank=True)  # tanggal_lunas
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.plate_number} sold {self.sale_date}"


class Sale(SaleFields):
    class Meta:
        db_table = "penjualans"
        indexes = [models.Index(fields=["division", "status", "sale_date"], name="ix_penjualan_div_status_date")]


class SaleHistory(ClosedPeriodModel, SaleFields):
    class Meta:
        db_table = "penjualans_history"
        verbose_name_plural = "sale history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_penjualans_history_source"),
        ]


# ---------- Installment (cicilan) ----------
class InstallmentFields(DivisionModel):
    """One payment towards a sale; division is copied from the sale."""

    sale_id = models.BigIntegerField(db_index=True)
    batch_no = models.PositiveIntegerField()  # batch_ke
    payment_date = models.DateField(db_index=True)  # tanggal_bayar
    amount = models.DecimalField(max_digits=18, decimal_places=2)  # jumlah_bayar
    # balance left after this payment, negative on overpayment
    remaining = models.DecimalField(max_digits=18, decimal_places=2)
    payment_type = models.CharField(max_length=40, default="cash")
    destination_company = models.ForeignKey(
        "dealer_core.Company", on_delete=models.PROTECT, related_name="+",
        null=True, blank=True,
    )
    status = models.CharField(
        max_length=20, choices=InstallmentStatus.choices, default=InstallmentStatus.PENDING
    )
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"Cicilan #{self.batch_no} sale {self.sale_id}"


class Installment(InstallmentFields):
    class Meta:
        db_table = "cicilan"
        constraints = [
            models.UniqueConstraint(fields=["sale_id", "batch_no"], name="uq_cicilan_sale_batch"),
        ]


class InstallmentHistory(ClosedPeriodModel, InstallmentFields):
    class Meta:
        db_table = "cicilan_history"
        verbose_name_plural = "installment history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_cicilan_history_source"),
        ]


# ---------- Sales fee (fee penjualan) ----------
class SalesFeeFields(DivisionModel):
    sale_id = models.BigIntegerField(db_index=True)
    fee_date = models.DateField(db_index=True)
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"Fee {self.amount} sale {self.sale_id}"


class SalesFee(SalesFeeFields):
    class Meta:
        db_table = "fee_penjualan"


class SalesFeeHistory(ClosedPeriodModel, SalesFeeFields):
    class Meta:
        db_table = "fee_penjualan_history"
        verbose_name_plural = "sales fee history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_fee_penjualan_history_source"),
        ]
