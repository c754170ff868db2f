from decimal import Decimal

from django.db import models

from .base import ClosedPeriodModel, DivisionModel


# ---------- Operational expense (operational) ----------
class OperationalExpenseFields(DivisionModel):
    """Running cost paid out of a company's modal."""

    branch = models.ForeignKey("dealer_core.Branch", on_delete=models.PROTECT, related_name="+")
    company = models.ForeignKey("dealer_core.Company", on_delete=models.PROTECT, related_name="+")

    date = models.DateField(db_index=True)  # tanggal
    category = models.CharField(max_length=80)  # kategori
    description = models.CharField(max_length=400)  # deskripsi
    amount = models.DecimalField(max_digits=18, decimal_places=2)  # nominal

    # Retroactive postings target a month that is already closed
    is_retroactive = models.BooleanField(default=False)
    original_month = models.DateField(null=True, blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.category} - {self.description}"


class OperationalExpense(OperationalExpenseFields):
    class Meta:
        db_table = "operational"
        indexes = [models.Index(fields=["division", "date"], name="ix_operational_div_date")]


class OperationalExpenseHistory(ClosedPeriodModel, OperationalExpenseFields):
    class Meta:
        db_table = "operational_history"
        verbose_name_plural = "operational expense history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_operational_history_source"),
        ]


# ---------- Bookkeeping (pembukuan) ----------
class LedgerEntryFields(DivisionModel):
    """Cash-book line: debit is money out, credit is money in."""

    branch = models.ForeignKey(
        "dealer_core.Branch", on_delete=models.PROTECT, related_name="+",
        null=True, blank=True,
    )
    company = models.ForeignKey(
        "dealer_core.Company", on_delete=models.PROTECT, related_name="+",
        null=True, blank=True,
    )
    date = models.DateField(db_index=True)
    description = models.CharField(max_length=400)  # keterangan
    debit = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    credit = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    # Origin of the line; plain ids because the source may be in history
    purchase_id = models.BigIntegerField(null=True, blank=True)
    origin_type = models.CharField(max_length=40, blank=True)
    origin_id = models.BigIntegerField(null=True, blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return f"{self.date} {self.description}"


class LedgerEntry(LedgerEntryFields):
    class Meta:
        db_table = "pembukuan"
        verbose_name_plural = "ledger entries"
        indexes = [
            models.Index(fields=["division", "date"], name="ix_pembukuan_div_date"),
            models.Index(fields=["origin_type", "origin_id"], name="ix_pembukuan_origin"),
        ]


class LedgerEntryHistory(ClosedPeriodModel, LedgerEntryFields):
    class Meta:
        db_table = "pembukuan_history"
        verbose_name_plural = "ledger entry history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_pembukuan_history_source"),
        ]
