from django.contrib import admin

from dealer_core.models import (AssetRecordHistory, BrokerageJobHistory,
                                InstallmentHistory, LedgerEntryHistory,
                                OperationalExpenseHistory, PurchaseHistory,
                                SaleHistory, SalesFeeHistory)

from .ReadOnly import ReadOnlyAdmin

# ---------- History tables (rows of closed months) ----------


@admin.register(PurchaseHistory)
class PurchaseHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "plate_number", "purchase_date",
                    "final_price", "closed_month", "closed_year")


@admin.register(SaleHistory)
class SaleHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "plate_number", "sale_date",
                    "sale_price", "profit", "closed_month", "closed_year")


@admin.register(InstallmentHistory)
class InstallmentHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "sale_id", "batch_no", "payment_date",
                    "amount", "closed_month", "closed_year")


@admin.register(SalesFeeHistory)
class SalesFeeHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "sale_id", "fee_date", "amount",
                    "closed_month", "closed_year")


@admin.register(LedgerEntryHistory)
class LedgerEntryHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "date", "description", "debit", "credit",
                    "closed_month", "closed_year")


@admin.register(OperationalExpenseHistory)
class OperationalExpenseHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "date", "category", "amount",
                    "closed_month", "closed_year")


@admin.register(BrokerageJobHistory)
class BrokerageJobHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "date", "service_type", "plate_number",
                    "profit", "closed_month", "closed_year")


@admin.register(AssetRecordHistory)
class AssetRecordHistoryAdmin(ReadOnlyAdmin):
    list_display = ("source_id", "division", "date", "name", "amount",
                    "closed_month", "closed_year")
