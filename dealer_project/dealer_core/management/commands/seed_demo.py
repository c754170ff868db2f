import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from dealer_core.models import (Branch, Brand, Company, MotorType, Purchase,
                                PurchaseStatus, Sale, SaleStatus, SalesFee)
from dealer_core.services.installments import record_installment_payment
from dealer_core.services.modal import update_company_modal
from dealer_core.services.operational import record_operational_expense
from dealer_core.services.stock import decrement_qty, increment_qty

User = get_user_model()


class Command(BaseCommand):
    help = "Seed the database with a demo dealership: companies, stock, sales and expenses for one month."

    # Define command-line arguments
    def add_arguments(self, parser):
        parser.add_argument("--year", type=int, default=None, help="Year of the demo month (default: last month)")
        parser.add_argument("--month", type=int, default=None, help="Demo month, 1-12 (default: last month)")
        parser.add_argument("--username", default="demo", help="Username for the demo user.")
        parser.add_argument("--password", default="demo123", help="Password for the demo user.")

    @transaction.atomic
    def handle(self, *args, **options):
        # default to the month before today
        first_of_this_month = datetime.date.today().replace(day=1)
        last_month = first_of_this_month - datetime.timedelta(days=1)
        year = options["year"] or last_month.year
        month = options["month"] or last_month.month

        def day(d):
            return datetime.date(year, month, d)

        user, created = User.objects.get_or_create(
            username=options["username"], defaults={"is_staff": True}
        )
        if created:
            user.set_password(options["password"])
            user.save()

        branch, _ = Branch.objects.get_or_create(name="Pusat")
        brand, _ = Brand.objects.get_or_create(name="Honda")
        motor_type, _ = MotorType.objects.get_or_create(brand=brand, name="Vario 125")

        companies = {}
        for division in ("sport", "start"):
            company, created = Company.objects.get_or_create(
                name=f"PT Demo {division.title()}", defaults={"division": division}
            )
            if created:
                update_company_modal(company.pk, Decimal("500000000"), description="Modal awal",
                                     date=day(1), user=user)
            companies[division] = company

        for idx, (division, status) in enumerate((("sport", PurchaseStatus.SOLD),
                                                  ("start", PurchaseStatus.SOLD),
                                                  ("sport", PurchaseStatus.READY)), start=1):
            purchase = Purchase.objects.create(
                division=division,
                branch=branch,
                brand=brand,
                motor_type=motor_type,
                source_company=companies[division],
                plate_number=f"B {1000 + idx} DMO",
                model_year=2021,
                purchase_date=day(2 + idx),
                purchase_price=Decimal("15000000"),
                final_price=Decimal("15500000"),
                status=status,
            )
            increment_qty(motor_type.pk)

            if status != PurchaseStatus.SOLD:
                continue

            sale = Sale.objects.create(
                division=division,
                branch=branch,
                brand=brand,
                motor_type=motor_type,
                company=companies[division],
                purchase_id=purchase.pk,
                plate_number=purchase.plate_number,
                sale_date=day(10 + idx),
                payment_type="cash_bertahap",
                purchase_price=purchase.final_price,
                sale_price=Decimal("18000000"),
                down_payment=Decimal("8000000"),
                remaining=Decimal("10000000"),
                profit=Decimal("2500000"),
                status=SaleStatus.BOOKED,
            )
            decrement_qty(motor_type.pk)
            SalesFee.objects.create(division=division, sale_id=sale.pk, fee_date=sale.sale_date,
                                    amount=Decimal("250000"))
            # settle in full so the sale is closable
            record_installment_payment(sale.pk, Decimal("10000000"), day(20),
                                       destination_company_id=companies[division].pk, user=user)

        record_operational_expense(
            company_id=companies["sport"].pk,
            branch_id=branch.pk,
            division="sport",
            category="Listrik",
            description="Tagihan listrik",
            amount=Decimal("750000"),
            date=day(25),
            user=user,
        )

        self.stdout.write(self.style.SUCCESS(
            f"Demo data seeded for {year}-{month:02d} (user {user.username})"))
