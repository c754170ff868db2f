from django.contrib import admin

from dealer_core.models import Branch, Brand, Company, ModalHistory, MotorType

from .mixins import DivisionAdminMixin


class ModalHistoryInline(admin.TabularInline):
    """Show the modal adjustments on the Company page"""

    model = ModalHistory
    extra = 0
    fields = ("date", "amount", "description", "created_at")
    readonly_fields = fields  # history is written by update_company_modal only
    can_delete = False
    ordering = ("-created_at",)

    def has_add_permission(self, request, obj=None):
        return False


# Register `Company` model in admin with this custom config
@admin.register(Company)
class CompanyAdmin(DivisionAdminMixin, admin.ModelAdmin):
    list_display = ("id", "name", "division", "account_number", "modal", "status")
    list_filter = ("division", "status")
    search_fields = ("name", "account_number")
    ordering = ("name",)
    # the balance moves through update_company_modal, never by hand
    readonly_fields = ("modal", "created_at", "updated_at")
    inlines = [ModalHistoryInline]


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(MotorType)
class MotorTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "brand", "name", "qty")
    list_filter = ("brand",)
    search_fields = ("name", "brand__name")
    # stock moves with purchases and sales
    readonly_fields = ("qty",)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("brand")
