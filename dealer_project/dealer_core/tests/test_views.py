import datetime
import json
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse

from ..models import Company, MonthlyClosure, ProfitAdjustment
from .helpers import DealerDataMixin


class ClosureApiTests(DealerDataMixin, TestCase):

    def post_json(self, name, payload):
        return self.client.post(reverse(f"dealer_core:{name}"), data=json.dumps(payload),
                                content_type="application/json")

    def test_status_reports_closed_flag(self):
        url = reverse("dealer_core:closure-status")
        self.assertFalse(self.client.get(url, {"month": 8, "year": 2025}).json()["is_closed"])

        MonthlyClosure.objects.create(closure_month=8, closure_year=2025)

        body = self.client.get(url, {"month": 8, "year": 2025}).json()
        self.assertTrue(body["ok"])
        self.assertTrue(body["is_closed"])

    def test_status_without_period_is_bad_request(self):
        response = self.client.get(reverse("dealer_core:closure-status"), {"month": ""})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["ok"])

    def test_preview_uses_division_header_when_no_parameter(self):
        self.make_full_month(2025, 8, division="sport")
        self.make_full_month(2025, 8, division="start")
        self.make_purchase(datetime.date(2025, 8, 9), division="start")
        url = reverse("dealer_core:closure-preview")

        body = self.client.get(url, {"month": 8, "year": 2025}, HTTP_X_DIVISION="start").json()
        self.assertEqual(body["division"], "start")
        self.assertEqual(body["counts"]["pembelian"], 2)

        body = self.client.get(url, {"month": 8, "year": 2025, "division": "sport"},
                               HTTP_X_DIVISION="start").json()
        self.assertEqual(body["counts"]["pembelian"], 1)

        body = self.client.get(url, {"month": 8, "year": 2025}).json()
        self.assertEqual(body["division"], "all")
        self.assertEqual(body["counts"]["pembelian"], 3)

    def test_close_then_duplicate_close(self):
        self.make_full_month(2025, 8)

        response = self.post_json("close-month", {"month": 8, "year": 2025, "notes": "ok"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["ok"])
        self.assertEqual(body["records_moved"]["pembelian"], 1)

        response = self.post_json("close-month", {"month": 8, "year": 2025})
        self.assertEqual(response.status_code, 400)
        self.assertIn("sudah di-close", response.json()["error"])

        months = self.client.get(reverse("dealer_core:closed-months")).json()["months"]
        self.assertEqual(months, ["2025-08"])

    def test_close_validates_period(self):
        for payload in ({"month": 13, "year": 2025}, {"month": 8, "year": 2019}, {"year": 2025}):
            response = self.post_json("close-month", payload)
            self.assertEqual(response.status_code, 400, payload)
        self.assertFalse(MonthlyClosure.objects.exists())

    def test_close_accepts_form_posts(self):
        response = self.client.post(reverse("dealer_core:close-month"), {"month": "5", "year": "2025"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(MonthlyClosure.objects.filter(closure_month=5, closure_year=2025).exists())

    def test_close_requires_post(self):
        response = self.client.get(reverse("dealer_core:close-month"))
        self.assertEqual(response.status_code, 405)

    def test_restore_requires_division(self):
        self.make_full_month(2025, 8)
        self.post_json("close-month", {"month": 8, "year": 2025})

        response = self.post_json("restore-month", {"month": 8, "year": 2025, "division": "all"})
        self.assertEqual(response.status_code, 400)

        response = self.post_json("restore-month", {"month": 8, "year": 2025, "division": "sport"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["records_restored"]["pembelian"], 1)
        self.assertFalse(MonthlyClosure.objects.exists())

    def test_restore_of_open_month(self):
        response = self.post_json("restore-month", {"month": 8, "year": 2025, "division": "sport"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("belum di-close", response.json()["error"])


class ModalAndProfitApiTests(DealerDataMixin, TestCase):

    def post_json(self, name, payload):
        return self.client.post(reverse(f"dealer_core:{name}"), data=json.dumps(payload),
                                content_type="application/json")

    def test_update_company_modal(self):
        response = self.post_json("update-company-modal",
                                  {"company_id": self.start.pk, "amount": "-125000.50", "description": "Sewa"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Decimal(response.json()["modal"]), Decimal("374999.50"))
        self.assertEqual(Company.objects.get(pk=self.start.pk).modal, Decimal("374999.50"))

    def test_update_modal_of_unknown_company(self):
        response = self.post_json("update-company-modal", {"company_id": 424242, "amount": "1"})
        self.assertEqual(response.status_code, 404)

    def test_deduct_and_restore_profit(self):
        payload = {"operational_id": 7, "date": "2025-07-01", "division": "sport",
                   "category": "Operasional Kurang Profit", "description": "AC", "amount": "150000"}
        response = self.post_json("deduct-profit", payload)
        self.assertEqual(response.status_code, 200)

        response = self.post_json("restore-profit", {"operational_id": 7})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(ProfitAdjustment.objects.filter(operational_id=7).count(), 2)

        response = self.post_json("restore-profit", {"operational_id": 7})
        self.assertEqual(response.status_code, 400)

    def test_bad_json_body(self):
        response = self.client.post(reverse("dealer_core:close-month"), data="{not json",
                                    content_type="application/json")
        self.assertEqual(response.status_code, 400)
