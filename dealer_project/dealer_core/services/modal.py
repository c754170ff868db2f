import logging
from decimal import Decimal

from django.db import models, transaction
from django.utils import timezone

from ..models import Company, ModalHistory
from .audit_helper import log_action

logger = logging.getLogger(__name__)


def update_company_modal(company_id, amount, description="", date=None, user=None):
    """
    Apply one signed adjustment to a company's modal.
    Positive amounts add capital (payments received), negative amounts
    spend it (expenses, purchases). Every call leaves a ModalHistory row,
    so the balance always equals the sum of its history.
    """
    amount = Decimal(str(amount))
    with transaction.atomic():
        # lock the company row until the transaction finishes
        company = Company.objects.select_for_update().get(pk=company_id)
        before = company.modal
        company.modal = before + amount
        company.touch()
        # update() skips full_clean; the balance is allowed to go negative
        Company.objects.filter(pk=company.pk).update(modal=company.modal, updated_at=company.updated_at)

        ModalHistory.objects.create(
            company=company,
            amount=amount,
            description=description,
            date=date or timezone.localdate(),
        )
        log_action(
            action="modal_adjust",
            instance=company,
            user=user,
            changes={"before": str(before), "amount": str(amount), "after": str(company.modal)},
        )

    logger.info("modal %s: %s %+.2f -> %s", company.pk, before, amount, company.modal)
    return company


def modal_balance_from_history(company):
    """Sum of every adjustment ever applied to the company."""
    total = ModalHistory.objects.filter(company=company).aggregate(
        total=models.Sum("amount")
    )["total"]
    return total or Decimal("0.00")
