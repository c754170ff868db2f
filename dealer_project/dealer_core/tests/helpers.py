import datetime
from decimal import Decimal

from ..models import (AssetRecord, Branch, Brand, BrokerageJob, Company,
                      Installment, LedgerEntry, MotorType, OperationalExpense,
                      Purchase, Sale, SalesFee)


class DealerDataMixin:
    """Master data plus helpers that create one record of each movable kind."""

    def setUp(self):
        self.branch = Branch.objects.create(name="Pusat")
        self.brand = Brand.objects.create(name="Honda")
        self.motor_type = MotorType.objects.create(brand=self.brand, name="Beat", qty=2)
        self.sport = Company.objects.create(name="PT Sport", division="sport", modal=Decimal("1000000.00"))
        self.start = Company.objects.create(name="PT Start", division="start", modal=Decimal("500000.00"))
        self.companies = {"sport": self.sport, "start": self.start}

    def make_purchase(self, date, division="sport", status="sold"):
        return Purchase.objects.create(
            division=division,
            branch=self.branch,
            brand=self.brand,
            motor_type=self.motor_type,
            source_company=self.companies[division],
            plate_number="B 1234 XY",
            model_year=2020,
            purchase_date=date,
            purchase_price=Decimal("12000000.00"),
            status=status,
        )

    def make_sale(self, date, division="sport", status="sold", remaining=Decimal("0.00")):
        return Sale.objects.create(
            division=division,
            branch=self.branch,
            brand=self.brand,
            motor_type=self.motor_type,
            company=self.companies[division],
            purchase_id=1,
            plate_number="B 1234 XY",
            sale_date=date,
            sale_price=Decimal("15000000.00"),
            remaining=remaining,
            status=status,
        )

    def make_installment(self, sale, date, status="completed", batch_no=1):
        return Installment.objects.create(
            division=sale.division,
            sale_id=sale.pk,
            batch_no=batch_no,
            payment_date=date,
            amount=Decimal("1000000.00"),
            remaining=Decimal("0.00"),
            status=status,
        )

    def make_fee(self, sale, date):
        return SalesFee.objects.create(division=sale.division, sale_id=sale.pk, fee_date=date,
                                       amount=Decimal("100000.00"))

    def make_operational(self, date, division="sport"):
        return OperationalExpense.objects.create(
            division=division,
            branch=self.branch,
            company=self.companies[division],
            date=date,
            category="Listrik",
            description="Tagihan",
            amount=Decimal("50000.00"),
        )

    def make_ledger_entry(self, date, division="sport"):
        return LedgerEntry.objects.create(division=division, date=date, description="Kas",
                                          debit=Decimal("50000.00"))

    def make_brokerage(self, date, division="sport", status="selesai"):
        return BrokerageJob.objects.create(division=division, date=date, service_type="STNK",
                                           status=status)

    def make_asset(self, date, division="sport"):
        return AssetRecord.objects.create(
            division=division,
            branch=self.branch,
            source_company=self.companies[division],
            date=date,
            name="Kompresor",
            amount=Decimal("2500000.00"),
        )

    def make_full_month(self, year, month, division="sport"):
        """One eligible record of every kind inside (year, month)."""
        day = datetime.date(year, month, 15)
        sale = self.make_sale(day, division)
        return {
            "pembelian": self.make_purchase(day, division),
            "penjualan": sale,
            "pembukuan": self.make_ledger_entry(day, division),
            "cicilan": self.make_installment(sale, day),
            "fee_penjualan": self.make_fee(sale, day),
            "operational": self.make_operational(day, division),
            "biro_jasa": self.make_brokerage(day, division),
            "assets": self.make_asset(day, division),
        }
