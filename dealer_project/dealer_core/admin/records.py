from django.contrib import admin

from dealer_core.models import (AssetRecord, BrokerageJob, Installment,
                                LedgerEntry, OperationalExpense,
                                ProfitAdjustment, Purchase, Sale, SalesFee)

from .mixins import DivisionAdminMixin

# ---------- Active records (open months) ----------


@admin.register(Purchase)
class PurchaseAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "plate_number", "brand", "motor_type",
                    "purchase_date", "final_price", "status")
    list_filter = ("division", "status", "branch")
    search_fields = ("plate_number",)
    date_hierarchy = "purchase_date"

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("brand", "motor_type", "branch")


@admin.register(Sale)
class SaleAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "plate_number", "sale_date", "payment_type",
                    "sale_price", "remaining", "profit", "status")
    list_filter = ("division", "status", "payment_type")
    search_fields = ("plate_number",)
    date_hierarchy = "sale_date"


@admin.register(Installment)
class InstallmentAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "sale_id", "batch_no", "payment_date",
                    "amount", "remaining", "status")
    list_filter = ("division", "status")
    date_hierarchy = "payment_date"
    # balances are maintained by record_installment_payment
    readonly_fields = ("remaining", "status")


@admin.register(SalesFee)
class SalesFeeAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "sale_id", "fee_date", "amount")
    list_filter = ("division",)


@admin.register(LedgerEntry)
class LedgerEntryAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "date", "description", "debit", "credit", "origin_type")
    list_filter = ("division", "origin_type")
    search_fields = ("description",)
    date_hierarchy = "date"


@admin.register(OperationalExpense)
class OperationalExpenseAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "date", "category", "description", "amount", "is_retroactive")
    list_filter = ("division", "category", "is_retroactive")
    search_fields = ("description",)


@admin.register(BrokerageJob)
class BrokerageJobAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "date", "service_type", "plate_number",
                    "total_paid", "remaining", "profit", "status")
    list_filter = ("division", "status")
    search_fields = ("plate_number", "service_type")


@admin.register(AssetRecord)
class AssetRecordAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "date", "name", "amount")
    list_filter = ("division",)
    search_fields = ("name",)


@admin.register(ProfitAdjustment)
class ProfitAdjustmentAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "division", "date", "operational_id", "category",
                    "amount", "adjustment_type", "status")
    list_filter = ("division", "adjustment_type", "status")
    readonly_fields = ("status", "created_at", "updated_at")
