from django.urls import path

from . import views

app_name = "dealer_core"

urlpatterns = [
    path("closures/status", views.closure_status_view, name="closure-status"),
    path("closures/preview", views.preview_close_view, name="closure-preview"),
    path("closures/closed-months", views.closed_months_view, name="closed-months"),
    path("rpc/close_month", views.close_month_view, name="close-month"),
    path("rpc/restore_month", views.restore_month_view, name="restore-month"),
    path("rpc/update_company_modal", views.update_company_modal_view, name="update-company-modal"),
    path("rpc/deduct_profit", views.deduct_profit_view, name="deduct-profit"),
    path("rpc/restore_profit", views.restore_profit_view, name="restore-profit"),
]
