import datetime
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from ..exceptions import InsufficientStockError
from ..models import AuditLog, Company, ModalHistory, MotorType, ProfitAdjustment
from ..services.modal import modal_balance_from_history, update_company_modal
from ..services.profit import (deduct_profit, profit_adjustment_summary,
                               restore_profit)
from ..services.stock import decrement_qty, increment_qty
from ..tasks import reconcile_company_modal
from .helpers import DealerDataMixin


class CompanyModalTests(DealerDataMixin, TestCase):

    def test_positive_and_negative_adjustments(self):
        update_company_modal(self.sport.pk, Decimal("250000.00"), description="Setoran")
        company = update_company_modal(self.sport.pk, "-100000", description="Beli ban")

        self.assertEqual(company.modal, Decimal("1150000.00"))
        self.assertEqual(Company.objects.get(pk=self.sport.pk).modal, Decimal("1150000.00"))
        self.assertEqual(ModalHistory.objects.filter(company=self.sport).count(), 2)
        self.assertEqual(modal_balance_from_history(self.sport), Decimal("150000.00"))

    def test_modal_may_go_negative(self):
        update_company_modal(self.start.pk, Decimal("-600000.00"))
        self.assertEqual(Company.objects.get(pk=self.start.pk).modal, Decimal("-100000.00"))

    def test_adjustment_is_audited(self):
        update_company_modal(self.sport.pk, Decimal("1.00"))
        entry = AuditLog.objects.get(action="modal_adjust")
        self.assertEqual(entry.object_id, str(self.sport.pk))
        self.assertEqual(entry.changes["after"], "1000001.00")

    def test_unknown_company_raises(self):
        with self.assertRaises(Company.DoesNotExist):
            update_company_modal(999999, Decimal("1.00"))


class ReconcileModalTaskTests(DealerDataMixin, TestCase):

    def test_reports_drift_between_balance_and_history(self):
        # the opening balance was set directly, without history
        result = reconcile_company_modal(self.sport.pk)

        self.assertEqual(result["drift"], "1000000.00")
        self.assertTrue(AuditLog.objects.filter(action="modal_drift").exists())

    def test_no_drift_when_history_matches(self):
        company = Company.objects.create(name="PT Baru", division="sport")
        update_company_modal(company.pk, Decimal("10.00"))

        result = reconcile_company_modal(company.pk)

        self.assertEqual(Decimal(result["drift"]), Decimal("0"))
        self.assertFalse(AuditLog.objects.filter(action="modal_drift").exists())


class ProfitAdjustmentTests(TestCase):

    def test_deduct_then_restore(self):
        day = datetime.date(2025, 7, 1)
        deduct_profit(10, day, "sport", "Operasional Kurang Profit", "Servis AC", Decimal("300000"))

        summary = profit_adjustment_summary(division="sport")
        self.assertEqual(summary["net_adjustment"], Decimal("300000"))

        restoration = restore_profit(10)

        self.assertEqual(restoration.adjustment_type, "restoration")
        self.assertEqual(restoration.amount, Decimal("300000"))
        deduction = ProfitAdjustment.objects.get(operational_id=10, adjustment_type="deduction")
        self.assertEqual(deduction.status, "reversed")
        self.assertEqual(profit_adjustment_summary(division="sport")["net_adjustment"], Decimal("0"))

    def test_summary_totals_each_adjustment_type(self):
        self.assertEqual(profit_adjustment_summary()["total_deductions"], Decimal("0.00"))

        deduct_profit(20, datetime.date(2025, 7, 1), "sport", "Kurang Profit", "", Decimal("150"))
        deduct_profit(21, datetime.date(2025, 7, 2), "sport", "Kurang Profit", "", Decimal("250"))
        restore_profit(20)

        summary = profit_adjustment_summary(division="sport")
        self.assertEqual(summary["total_deductions"], Decimal("400"))
        self.assertEqual(summary["total_restorations"], Decimal("150"))
        self.assertEqual(summary["net_adjustment"], Decimal("250"))

    def test_restore_twice_is_rejected(self):
        deduct_profit(11, datetime.date(2025, 7, 1), "start", "Kurang Profit", "", Decimal("5"))
        restore_profit(11)
        with self.assertRaises(ValidationError):
            restore_profit(11)

    def test_amount_must_be_positive(self):
        with self.assertRaises(ValidationError):
            deduct_profit(12, datetime.date(2025, 7, 1), "sport", "Kurang Profit", "", 0)
        self.assertFalse(ProfitAdjustment.objects.exists())

    def test_summary_filters_by_division_and_date(self):
        deduct_profit(1, datetime.date(2025, 6, 15), "sport", "Kurang Profit", "", Decimal("100"))
        deduct_profit(2, datetime.date(2025, 7, 15), "sport", "Kurang Profit", "", Decimal("200"))
        deduct_profit(3, datetime.date(2025, 7, 15), "start", "Kurang Profit", "", Decimal("400"))

        summary = profit_adjustment_summary(
            division="sport", start=datetime.date(2025, 7, 1), end=datetime.date(2025, 7, 31)
        )
        self.assertEqual(summary["total_deductions"], Decimal("200"))
        self.assertEqual(profit_adjustment_summary()["total_deductions"], Decimal("700"))


class StockTests(DealerDataMixin, TestCase):

    def test_increment_and_decrement(self):
        self.assertEqual(increment_qty(self.motor_type.pk).qty, 3)
        self.assertEqual(decrement_qty(self.motor_type.pk).qty, 2)

    def test_stock_never_goes_below_zero(self):
        decrement_qty(self.motor_type.pk)
        decrement_qty(self.motor_type.pk)
        with self.assertRaises(InsufficientStockError):
            decrement_qty(self.motor_type.pk)
        self.assertEqual(MotorType.objects.get(pk=self.motor_type.pk).qty, 0)
