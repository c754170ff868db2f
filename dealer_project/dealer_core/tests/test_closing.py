import datetime
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.test import TestCase

from ..client import ClosureClient, ClosureState
from ..exceptions import (ClosedPeriodError, InvalidDivisionError,
                          MonthAlreadyClosedError, MonthNotClosedError)
from ..ledger import DatabaseLedger
from ..models import (AuditLog, Company, LedgerEntry, MonthlyClosure,
                      Purchase, PurchaseHistory, Sale, SaleHistory)
from ..services.closing import close_month, preview_close, restore_month
from ..services.installments import delete_installment
from ..services.movable import MOVABLE_KINDS
from ..services.periods import closed_months, ensure_month_open, is_month_closed
from .helpers import DealerDataMixin


class CloseMonthTests(DealerDataMixin, TestCase):

    def test_close_moves_every_kind_and_records_counts(self):
        self.make_full_month(2025, 8)

        result = close_month(8, 2025, notes="Agustus")

        self.assertEqual(result["month"], 8)
        self.assertEqual(result["year"], 2025)
        self.assertEqual(result["records_moved"], {kind.key: 1 for kind in MOVABLE_KINDS})

        # nothing of the month is left in the active tables
        for kind in MOVABLE_KINDS:
            self.assertFalse(kind.eligible(8, 2025).exists(), kind.key)
            self.assertEqual(kind.closed(8, 2025).count(), 1, kind.key)

        closure = MonthlyClosure.objects.get(closure_month=8, closure_year=2025)
        self.assertEqual(closure.notes, "Agustus")
        self.assertEqual(closure.total_pembelian_moved, 1)
        self.assertEqual(closure.total_assets_moved, 1)
        self.assertEqual(str(closure), "2025-08")

    def test_history_rows_keep_source_id_and_period_tag(self):
        purchase = self.make_purchase(datetime.date(2025, 8, 3))

        close_month(8, 2025)

        row = PurchaseHistory.objects.get(source_id=purchase.pk)
        self.assertEqual((row.closed_month, row.closed_year), (8, 2025))
        self.assertEqual(row.plate_number, purchase.plate_number)
        self.assertEqual(row.purchase_date, purchase.purchase_date)
        self.assertIsNotNone(row.closed_at)

    def test_only_terminal_status_rows_move(self):
        day = datetime.date(2025, 8, 10)
        sold = self.make_purchase(day, status="sold")
        ready = self.make_purchase(day, status="ready")
        booked_sale = self.make_sale(day, status="booked", remaining=Decimal("5000000.00"))
        pending = self.make_installment(booked_sale, day, status="pending")
        in_progress = self.make_brokerage(day, status="dalam proses")

        result = close_month(8, 2025)

        self.assertEqual(result["records_moved"]["pembelian"], 1)
        self.assertEqual(result["records_moved"]["penjualan"], 0)
        self.assertEqual(result["records_moved"]["cicilan"], 0)
        self.assertEqual(result["records_moved"]["biro_jasa"], 0)
        self.assertFalse(Purchase.objects.filter(pk=sold.pk).exists())
        self.assertTrue(Purchase.objects.filter(pk=ready.pk).exists())
        self.assertTrue(Sale.objects.filter(pk=booked_sale.pk).exists())
        self.assertTrue(pending.__class__.objects.filter(pk=pending.pk).exists())
        self.assertTrue(in_progress.__class__.objects.filter(pk=in_progress.pk).exists())

    def test_december_range_wraps_to_next_year(self):
        last_day = self.make_sale(datetime.date(2024, 12, 31))
        next_year = self.make_sale(datetime.date(2025, 1, 1))
        previous = self.make_sale(datetime.date(2024, 11, 30))

        result = close_month(12, 2024)

        self.assertEqual(result["records_moved"]["penjualan"], 1)
        self.assertTrue(SaleHistory.objects.filter(source_id=last_day.pk).exists())
        self.assertTrue(Sale.objects.filter(pk=next_year.pk).exists())
        self.assertTrue(Sale.objects.filter(pk=previous.pk).exists())

    def test_second_close_of_same_month_is_rejected(self):
        self.make_purchase(datetime.date(2025, 8, 1))
        close_month(8, 2025)
        # a late row for the closed month must stay where it is
        late = self.make_purchase(datetime.date(2025, 8, 20))

        with self.assertRaises(MonthAlreadyClosedError):
            close_month(8, 2025)

        self.assertEqual(MonthlyClosure.objects.filter(closure_month=8, closure_year=2025).count(), 1)
        self.assertTrue(Purchase.objects.filter(pk=late.pk).exists())

    def test_close_without_records_still_creates_closure(self):
        result = close_month(3, 2025)

        self.assertEqual(sum(result["records_moved"].values()), 0)
        self.assertEqual(closed_months(), ["2025-03"])

    def test_invalid_period_is_rejected(self):
        with self.assertRaises(ValidationError):
            close_month("", 2025)
        with self.assertRaises(ValidationError):
            close_month(13, 2025)
        self.assertFalse(MonthlyClosure.objects.exists())

    def test_close_and_restore_leave_modal_untouched(self):
        self.make_full_month(2025, 8)
        before = Company.objects.get(pk=self.sport.pk).modal

        close_month(8, 2025)
        self.assertEqual(Company.objects.get(pk=self.sport.pk).modal, before)
        restore_month(8, 2025, "sport")
        self.assertEqual(Company.objects.get(pk=self.sport.pk).modal, before)

    def test_close_writes_audit_entry(self):
        close_month(8, 2025)
        self.assertTrue(AuditLog.objects.filter(action="close_month", object_type="MonthlyClosure").exists())

    def test_closed_month_rejects_new_postings(self):
        close_month(8, 2025)
        with self.assertRaises(ClosedPeriodError):
            ensure_month_open(datetime.date(2025, 8, 31))
        # the next month is still open
        ensure_month_open(datetime.date(2025, 9, 1))


class PreviewTests(DealerDataMixin, TestCase):

    def test_preview_counts_per_kind_and_skips_bookkeeping(self):
        self.make_full_month(2025, 8, division="sport")
        self.make_full_month(2025, 8, division="start")

        counts = preview_close(8, 2025, "all")

        self.assertNotIn("pembukuan", counts)
        self.assertEqual(counts["pembelian"], 2)
        self.assertEqual(counts["assets"], 2)
        self.assertEqual(len(counts), 7)

    def test_preview_filters_by_division(self):
        self.make_full_month(2025, 8, division="sport")
        self.make_full_month(2025, 8, division="start")
        self.make_purchase(datetime.date(2025, 8, 2), division="start")

        self.assertEqual(preview_close(8, 2025, "sport")["pembelian"], 1)
        self.assertEqual(preview_close(8, 2025, "start")["pembelian"], 2)

    def test_preview_is_read_only(self):
        self.make_full_month(2025, 8)

        first = preview_close(8, 2025)
        second = preview_close(8, 2025)
        result = close_month(8, 2025)

        self.assertEqual(first, second)
        for key, count in first.items():
            self.assertEqual(result["records_moved"][key], count)


class RestoreMonthTests(DealerDataMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.sport_rows = self.make_full_month(2025, 8, division="sport")
        self.start_rows = self.make_full_month(2025, 8, division="start")
        close_month(8, 2025)

    def test_restore_brings_back_one_division_under_original_ids(self):
        result = restore_month(8, 2025, "sport")

        self.assertEqual(result["division"], "sport")
        self.assertEqual(result["records_restored"]["pembelian"], 1)
        self.assertTrue(Purchase.objects.filter(pk=self.sport_rows["pembelian"].pk).exists())
        self.assertFalse(Purchase.objects.filter(pk=self.start_rows["pembelian"].pk).exists())
        self.assertTrue(PurchaseHistory.objects.filter(source_id=self.start_rows["pembelian"].pk).exists())

        # the installment still points at its sale
        installment = self.sport_rows["cicilan"].__class__.objects.get(pk=self.sport_rows["cicilan"].pk)
        self.assertTrue(Sale.objects.filter(pk=installment.sale_id).exists())

    def test_partial_restore_lowers_counters_and_keeps_closure(self):
        restore_month(8, 2025, "sport")

        closure = MonthlyClosure.objects.get(closure_month=8, closure_year=2025)
        self.assertEqual(closure.total_pembelian_moved, 1)
        self.assertEqual(closure.total_pembukuan_moved, 1)

    def test_restoring_every_division_deletes_closure(self):
        restore_month(8, 2025, "sport")
        restore_month(8, 2025, "start")

        self.assertFalse(MonthlyClosure.objects.exists())
        self.assertEqual(LedgerEntry.objects.count(), 2)
        # the month can be closed again
        result = close_month(8, 2025)
        self.assertEqual(result["records_moved"]["pembelian"], 2)

    def test_restore_of_open_month_is_rejected(self):
        with self.assertRaises(MonthNotClosedError):
            restore_month(9, 2025, "sport")

    def test_restore_requires_concrete_division(self):
        with self.assertRaises(InvalidDivisionError):
            restore_month(8, 2025, "all")
        with self.assertRaises(InvalidDivisionError):
            restore_month(8, 2025, "unknown")
        self.assertEqual(PurchaseHistory.objects.count(), 2)

    def test_restored_division_is_open_again(self):
        restore_month(8, 2025, "sport")

        closure = MonthlyClosure.objects.get(closure_month=8, closure_year=2025)
        self.assertEqual(closure.reopened_divisions, ["sport"])
        self.assertFalse(is_month_closed(8, 2025, "sport"))
        self.assertTrue(is_month_closed(8, 2025, "start"))
        self.assertTrue(is_month_closed(8, 2025))
        ensure_month_open(datetime.date(2025, 8, 20), "sport")
        with self.assertRaises(ClosedPeriodError):
            ensure_month_open(datetime.date(2025, 8, 20), "start")

    def test_restoring_same_division_twice_lists_it_once(self):
        restore_month(8, 2025, "sport")
        result = restore_month(8, 2025, "sport")

        self.assertEqual(sum(result["records_restored"].values()), 0)
        closure = MonthlyClosure.objects.get(closure_month=8, closure_year=2025)
        self.assertEqual(closure.reopened_divisions, ["sport"])

    def test_restore_edit_and_close_again(self):
        restore_month(8, 2025, "sport")
        delete_installment(self.sport_rows["cicilan"].pk)
        late = self.make_purchase(datetime.date(2025, 8, 25), division="sport")

        result = close_month(8, 2025, notes="koreksi")

        # only the reopened division moves; start stayed in history
        self.assertEqual(result["records_moved"]["pembelian"], 2)
        self.assertEqual(result["records_moved"]["cicilan"], 0)
        self.assertFalse(Purchase.objects.filter(pk=late.pk).exists())
        self.assertFalse(Purchase.objects.filter(pk=self.sport_rows["pembelian"].pk).exists())
        self.assertEqual(PurchaseHistory.objects.closed_in(8, 2025).count(), 3)

        closure = MonthlyClosure.objects.get(closure_month=8, closure_year=2025)
        self.assertEqual(closure.reopened_divisions, [])
        self.assertEqual(closure.total_pembelian_moved, 3)
        self.assertEqual(closure.notes, "koreksi")
        self.assertTrue(is_month_closed(8, 2025, "sport"))

        with self.assertRaises(MonthAlreadyClosedError):
            close_month(8, 2025)

    def test_closure_with_history_cannot_be_deleted(self):
        closure = MonthlyClosure.objects.get(closure_month=8, closure_year=2025)
        with self.assertRaises(ValidationError):
            closure.delete()


@pytest.mark.django_db
@pytest.mark.parametrize("steps", [
    ["close", "close"],
    ["close", "restore:sport", "close"],
    ["close", "restore:sport", "restore:start", "close", "close"],
])
def test_at_most_one_closure_per_month(steps):
    for step in steps:
        try:
            if step == "close":
                close_month(8, 2025)
            else:
                restore_month(8, 2025, step.split(":")[1])
        except ValidationError:
            pass
        assert MonthlyClosure.objects.filter(closure_month=8, closure_year=2025).count() <= 1


@pytest.mark.django_db
def test_client_against_database_ledger():
    client = ClosureClient(DatabaseLedger(), division="sport")

    client.select_period("8", "2025")
    assert client.is_already_closed is False
    assert client.preview_close()["pembelian"] == 0

    client.close_month()
    assert client.state == ClosureState.CLOSED
    assert client.close_result["records_moved"]["pembelian"] == 0

    client.select_period("8", "2025")
    assert client.is_already_closed is True

    client.close_month()
    assert "sudah di-close" in client.notifier.last.description

    client.restore_month()
    assert client.state == ClosureState.RESTORED
    assert client.close_result is None
    assert client.is_already_closed is False
    assert not MonthlyClosure.objects.exists()
