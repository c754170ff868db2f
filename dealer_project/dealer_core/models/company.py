from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from .base import TimestampedModel


# ---------- Company (source of funds) ----------
class Company(TimestampedModel):
    """A company account whose running capital ("modal") funds transactions."""

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
    ]

    name = models.CharField(max_length=200)  # nama_perusahaan
    division = models.CharField(max_length=20, db_index=True)
    account_number = models.CharField(max_length=64, blank=True)

    # Running capital balance; only services.modal.update_company_modal
    # writes it, every change leaves a ModalHistory row
    modal = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")

    class Meta:
        db_table = "companies"
        verbose_name_plural = "companies"
        ordering = ("name",)

    def __str__(self):
        return self.name

    def clean(self):
        if self.division not in settings.DEALER_DIVISIONS:
            raise ValidationError(f"Unknown division: {self.division}")

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)


# ---------- Branch (cabang) ----------
class Branch(TimestampedModel):
    name = models.CharField(max_length=120, unique=True)

    class Meta:
        db_table = "cabang"
        verbose_name_plural = "branches"
        ordering = ("name",)

    def __str__(self):
        return self.name


# ---------- Brand ----------
class Brand(TimestampedModel):
    name = models.CharField(max_length=120, unique=True)

    class Meta:
        db_table = "brands"
        ordering = ("name",)

    def __str__(self):
        return self.name


# ---------- Motor type (jenis motor) ----------
class MotorType(TimestampedModel):
    brand = models.ForeignKey(Brand, on_delete=models.PROTECT, related_name="motor_types")
    name = models.CharField(max_length=120)
    # units in stock; moved by services.stock
    qty = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "jenis_motor"
        constraints = [
            models.UniqueConstraint(fields=["brand", "name"], name="uq_motor_type_brand_name"),
        ]

    def __str__(self):
        return f"{self.brand} {self.name}"


# ---------- Modal history ----------
class ModalHistory(models.Model):
    """One signed adjustment of a company's modal balance."""

    company = models.ForeignKey(Company, on_delete=models.PROTECT, related_name="modal_history")
    amount = models.DecimalField(max_digits=18, decimal_places=2)  # jumlah (signed)
    description = models.CharField(max_length=400, blank=True)  # keterangan
    date = models.DateField(default=timezone.localdate)  # tanggal
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "modal_history"
        indexes = [models.Index(fields=["company", "date"], name="ix_modal_history_company_date")]
        ordering = ("-created_at", "-id")

    def __str__(self):
        return f"{self.company} {self.amount:+}"
