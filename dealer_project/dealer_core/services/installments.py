import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models, transaction

from ..models import (Installment, InstallmentHistory, InstallmentStatus,
                      Sale, SaleStatus)
from .audit_helper import log_action
from .modal import update_company_modal
from .periods import ensure_month_open
from .posting import post_ledger_entry, remove_ledger_entries

logger = logging.getLogger(__name__)


def _next_batch_no(sale_id):
    # batches already closed into history still count
    agg_active = Installment.objects.filter(sale_id=sale_id).aggregate(m=models.Max("batch_no"))["m"]
    agg_history = InstallmentHistory.objects.filter(sale_id=sale_id).aggregate(m=models.Max("batch_no"))["m"]
    return max(agg_active or 0, agg_history or 0) + 1


def _signed_balance(sale):
    # the sale never stores a negative balance; an overpayment shows on
    # the remaining of its latest installment
    if sale.remaining > 0:
        return sale.remaining
    latest = (
        Installment.objects.filter(sale_id=sale.pk)
        .order_by("-batch_no")
        .values_list("remaining", flat=True)
        .first()
    )
    if latest is None:
        return Decimal("0.00")
    return min(Decimal("0.00"), latest)


# ----------------------------
# Installment (cicilan) workflows
# ----------------------------
def record_installment_payment(sale_id, amount, payment_date, destination_company_id=None,
                               payment_type="cash", notes="", user=None):
    """
    Record one payment towards a booked sale.
    Workflow:
        1. Create the installment with the next batch number and the balance
           left after it (negative on overpayment).
        2. Lower the sale's remaining balance; a settled sale becomes "sold"
           with its paid-off date.
        3. Post the cash-in to the books and credit the receiving company's modal.
    """
    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValidationError("Jumlah bayar harus > 0")

    with transaction.atomic():
        try:
            sale = Sale.objects.select_for_update().get(pk=sale_id)
        except Sale.DoesNotExist:
            raise ValidationError(f"Penjualan {sale_id} tidak ditemukan")
        ensure_month_open(payment_date, sale.division)

        if sale.status == SaleStatus.CANCELLED:
            raise ValidationError("Penjualan sudah dibatalkan")

        remaining_after = sale.remaining - amount
        settled = remaining_after <= 0

        installment = Installment.objects.create(
            division=sale.division,
            sale_id=sale.pk,
            batch_no=_next_batch_no(sale.pk),
            payment_date=payment_date,
            amount=amount,
            remaining=remaining_after,
            payment_type=payment_type,
            destination_company_id=destination_company_id,
            status=InstallmentStatus.COMPLETED if settled else InstallmentStatus.PENDING,
            notes=notes,
        )

        # the sale never shows a negative balance
        sale.remaining = max(Decimal("0.00"), remaining_after)
        if settled:
            sale.status = SaleStatus.SOLD
            sale.paid_off_date = payment_date
        sale.touch()
        sale.save(update_fields=["remaining", "status", "paid_off_date", "updated_at"])

        post_ledger_entry(
            division=sale.division,
            date=payment_date,
            description=f"Cicilan ke-{installment.batch_no} {sale.plate_number}",
            credit=amount,
            branch=sale.branch,
            origin_type="cicilan",
            origin_id=installment.pk,
        )

        if destination_company_id:
            update_company_modal(
                destination_company_id,
                amount,
                description=f"Cicilan ke-{installment.batch_no} {sale.plate_number}",
                date=payment_date,
                user=user,
            )

        log_action(action="installment_payment", instance=installment, user=user,
                   changes={"amount": str(amount), "remaining": str(remaining_after)})

    logger.info("installment %s for sale %s: %s", installment.batch_no, sale_id, amount)
    return installment


def delete_installment(installment_id, user=None):
    """
    Undo one installment: books and modal lose the payment and the sale
    owes its amount again, whatever was paid after it.
    """
    with transaction.atomic():
        installment = Installment.objects.select_for_update().get(pk=installment_id)
        ensure_month_open(installment.payment_date, installment.division)

        remove_ledger_entries("cicilan", installment.pk)

        if installment.destination_company_id:
            update_company_modal(
                installment.destination_company_id,
                -installment.amount,
                description=f"Hapus cicilan ke-{installment.batch_no}",
                user=user,
            )

        sale = Sale.objects.select_for_update().filter(pk=installment.sale_id).first()
        if sale is not None:
            balance = _signed_balance(sale) + installment.amount
            sale.remaining = max(Decimal("0.00"), balance)
            if sale.remaining > 0:
                sale.status = SaleStatus.BOOKED
                sale.paid_off_date = None
            sale.touch()
            sale.save(update_fields=["remaining", "status", "paid_off_date", "updated_at"])

        log_action(action="installment_delete", instance=installment, user=user,
                   changes={"amount": str(installment.amount)})
        installment.delete()
