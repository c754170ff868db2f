from django.conf import settings
from django.contrib import admin

from dealer_core.models import MonthlyClosure

from .actions import make_restore_action
from .ReadOnly import ReadOnlyAdmin


# Register `MonthlyClosure` model
@admin.register(MonthlyClosure)
class MonthlyClosureAdmin(ReadOnlyAdmin):
    """Closures are created by close_month only; the list offers restore per division."""

    list_display = (
        "__str__",
        "closure_date",
        "created_by",
        "total_pembelian_moved",
        "total_penjualan_moved",
        "total_cicilan_moved",
        "total_pembukuan_moved",
        "total_operational_moved",
        "reopened_divisions",
    )
    list_filter = ("closure_year", "closure_month")
    ordering = ("-closure_year", "-closure_month")

    def get_list_filter(self, request):
        return self.list_filter

    def get_actions(self, request):
        actions = {}
        for division in settings.DEALER_DIVISIONS:
            func, name, description = self.get_action(make_restore_action(division))
            actions[name] = (func, name, description)
        return actions

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("created_by")
