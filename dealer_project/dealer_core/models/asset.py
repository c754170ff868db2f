from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .base import ClosedPeriodModel, DivisionModel


# ---------- Asset record (pencatatan asset) ----------
class AssetRecordFields(DivisionModel):
    # tracks equipment and other assets bought with company modal
    branch = models.ForeignKey("dealer_core.Branch", on_delete=models.PROTECT, related_name="+")
    # company whose modal paid for it
    source_company = models.ForeignKey("dealer_core.Company", on_delete=models.PROTECT, related_name="+")

    date = models.DateField(db_index=True)  # tanggal
    name = models.CharField(max_length=200)  # nama
    # acquisition cost, stored as Decimal for precision
    amount = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True

    def __str__(self):
        return self.name

    def clean(self):
        # Cost cannot be negative
        if self.amount is not None and self.amount < 0:
            raise ValidationError("Asset amount must be >= 0")


class AssetRecord(AssetRecordFields):
    class Meta:
        db_table = "pencatatan_asset"

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)


class AssetRecordHistory(ClosedPeriodModel, AssetRecordFields):
    class Meta:
        db_table = "pencatatan_asset_history"
        verbose_name_plural = "asset record history"
        constraints = [
            models.UniqueConstraint(fields=["source_id"], name="uq_pencatatan_asset_history_source"),
        ]
