"""
Registry of the record kinds a month-end closure moves between their
active table and their history table.
"""
from dataclasses import dataclass
from typing import Optional

from django.core.exceptions import ValidationError

from ..models import (AssetRecord, AssetRecordHistory, BrokerageJob,
                      BrokerageJobHistory, BrokerageStatus, Installment,
                      InstallmentHistory, InstallmentStatus, LedgerEntry,
                      LedgerEntryHistory, OperationalExpense,
                      OperationalExpenseHistory, Purchase, PurchaseHistory,
                      PurchaseStatus, Sale, SaleHistory, SalesFee,
                      SalesFeeHistory, SaleStatus)
from .periods import month_range


@dataclass(frozen=True)
class MovableKind:
    key: str  # key in records_moved / records_restored
    counter: str  # MonthlyClosure.total_*_moved column
    active: type
    history: type
    date_field: str
    # only rows in this status may be closed; None = date range alone
    terminal_status: Optional[str] = None
    # part of the seven-count close preview
    in_preview: bool = True

    def business_fields(self):
        """Column attnames shared by the active and the history table."""
        return [f.attname for f in self.active._meta.concrete_fields if not f.primary_key]

    def eligible(self, month, year, division=None):
        """Active rows a close of (month, year) would move."""
        start, end = month_range(year, month)
        qs = self.active.objects.for_division(division).between(self.date_field, start, end)
        if self.terminal_status is not None:
            qs = qs.filter(status=self.terminal_status)
        return qs

    def closed(self, month, year, division=None):
        """History rows tagged with (month, year)."""
        return self.history.objects.closed_in(month, year).for_division(division)


MOVABLE_KINDS = (
    MovableKind("pembelian", "total_pembelian_moved", Purchase, PurchaseHistory,
                "purchase_date", PurchaseStatus.SOLD),
    MovableKind("penjualan", "total_penjualan_moved", Sale, SaleHistory,
                "sale_date", SaleStatus.SOLD),
    MovableKind("pembukuan", "total_pembukuan_moved", LedgerEntry, LedgerEntryHistory,
                "date", in_preview=False),
    MovableKind("cicilan", "total_cicilan_moved", Installment, InstallmentHistory,
                "payment_date", InstallmentStatus.COMPLETED),
    MovableKind("fee_penjualan", "total_fee_moved", SalesFee, SalesFeeHistory,
                "fee_date"),
    MovableKind("operational", "total_operational_moved", OperationalExpense,
                OperationalExpenseHistory, "date"),
    MovableKind("biro_jasa", "total_biro_jasa_moved", BrokerageJob, BrokerageJobHistory,
                "date", BrokerageStatus.DONE),
    MovableKind("assets", "total_assets_moved", AssetRecord, AssetRecordHistory,
                "date"),
)

KINDS_BY_KEY = {kind.key: kind for kind in MOVABLE_KINDS}

# counts that decide whether a close has anything worth moving
PRIMARY_KEYS = ("pembelian", "penjualan", "cicilan")


# ----------------------------
# Status normalisation
# ----------------------------
STATUS_CHOICES = {
    "pembelian": PurchaseStatus,
    "penjualan": SaleStatus,
    "cicilan": InstallmentStatus,
    "biro_jasa": BrokerageStatus,
}

# spellings seen in imported data and older screens
STATUS_ALIASES = {
    "penjualan": {"selesai": SaleStatus.SOLD, "lunas": SaleStatus.SOLD, "batal": SaleStatus.CANCELLED},
    "cicilan": {"lunas": InstallmentStatus.COMPLETED, "selesai": InstallmentStatus.COMPLETED},
    "biro_jasa": {"proses": BrokerageStatus.IN_PROGRESS, "done": BrokerageStatus.DONE},
}


def normalize_status(kind_key, raw):
    """
    Lower-case a status string and map known aliases onto the kind's
    enumerated values. Unknown statuses raise ValidationError.
    """
    choices = STATUS_CHOICES.get(kind_key)
    if choices is None:
        raise ValidationError(f"{kind_key} has no status")

    value = " ".join(str(raw or "").split()).lower()
    value = STATUS_ALIASES.get(kind_key, {}).get(value, value)
    if value not in choices.values:
        raise ValidationError(f"Unknown {kind_key} status: {raw!r}")
    return choices(value).value
