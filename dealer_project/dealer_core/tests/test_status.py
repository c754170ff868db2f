import datetime

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, TestCase

from ..models import BrokerageJob, Sale
from ..services.closing import preview_close
from ..services.movable import normalize_status
from ..services.periods import month_range
from .helpers import DealerDataMixin


class NormalizeStatusTests(SimpleTestCase):

    def test_aliases_and_casing(self):
        self.assertEqual(normalize_status("penjualan", "Selesai"), "sold")
        self.assertEqual(normalize_status("penjualan", " SOLD "), "sold")
        self.assertEqual(normalize_status("biro_jasa", "Selesai"), "selesai")
        self.assertEqual(normalize_status("biro_jasa", "Dalam  Proses"), "dalam proses")
        self.assertEqual(normalize_status("cicilan", "Lunas"), "completed")

    def test_unknown_status_is_rejected(self):
        with self.assertRaises(ValidationError):
            normalize_status("pembelian", "hilang")
        with self.assertRaises(ValidationError):
            normalize_status("assets", "sold")

    def test_month_range_is_half_open(self):
        self.assertEqual(month_range(2025, 2), (datetime.date(2025, 2, 1), datetime.date(2025, 3, 1)))
        self.assertEqual(month_range(2024, 12), (datetime.date(2024, 12, 1), datetime.date(2025, 1, 1)))


class StatusSignalTests(DealerDataMixin, TestCase):

    def test_saved_statuses_are_canonical_and_closable(self):
        sale = self.make_sale(datetime.date(2025, 8, 5), status="Selesai")
        job = self.make_brokerage(datetime.date(2025, 8, 5), status="SELESAI")

        self.assertEqual(Sale.objects.get(pk=sale.pk).status, "sold")
        self.assertEqual(BrokerageJob.objects.get(pk=job.pk).status, "selesai")

        counts = preview_close(8, 2025)
        self.assertEqual(counts["penjualan"], 1)
        self.assertEqual(counts["biro_jasa"], 1)

    def test_unknown_status_is_not_saved(self):
        with self.assertRaises(ValidationError):
            self.make_purchase(datetime.date(2025, 8, 5), status="hilang")
