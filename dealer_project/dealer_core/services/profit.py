import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from ..models import ProfitAdjustment
from .audit_helper import log_action

logger = logging.getLogger(__name__)


def deduct_profit(operational_id, date, division, category, description, amount, user=None):
    """Record a profit deduction for a "Kurang Profit" operational posting."""
    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValidationError("Nominal pengurangan keuntungan harus > 0")

    with transaction.atomic():
        adjustment = ProfitAdjustment.objects.create(
            operational_id=operational_id,
            date=date,
            division=division,
            category=category,
            description=description,
            amount=amount,
            adjustment_type="deduction",
            status="active",
        )
        log_action(action="deduct_profit", instance=adjustment, user=user,
                   changes={"amount": str(amount), "date": str(date)})

    logger.info("profit deduction %s for operational %s", amount, operational_id)
    return adjustment


def restore_profit(operational_id, user=None):
    """
    Reverse the active deduction of an operational posting.
    The deduction is marked reversed and a restoration row records
    the amount given back. Restoring twice is rejected.
    """
    with transaction.atomic():
        deduction = (
            ProfitAdjustment.objects.select_for_update()
            .filter(operational_id=operational_id, adjustment_type="deduction", status="active")
            .first()
        )
        if deduction is None:
            raise ValidationError(
                f"Tidak ada pengurangan keuntungan aktif untuk operational {operational_id}"
            )

        now = timezone.now()
        deduction.status = "reversed"
        deduction.updated_at = now
        deduction.save(update_fields=["status", "updated_at"])

        restoration = ProfitAdjustment.objects.create(
            operational_id=operational_id,
            date=deduction.date,
            division=deduction.division,
            category=deduction.category,
            description=deduction.description,
            amount=deduction.amount,
            adjustment_type="restoration",
            status="active",
        )
        log_action(action="restore_profit", instance=deduction, user=user,
                   changes={"amount": str(deduction.amount)})

    return restoration


def profit_adjustment_summary(division=None, start=None, end=None):
    """Totals of deductions and restorations, optionally filtered; net is what the profit lost."""
    qs = ProfitAdjustment.objects.all()
    if division and division != "all":
        qs = qs.filter(division=division)
    if start:
        qs = qs.filter(date__gte=start)
    if end:
        qs = qs.filter(date__lte=end)

    totals = qs.aggregate(
        deductions=models.Sum("amount", filter=models.Q(adjustment_type="deduction")),
        restorations=models.Sum("amount", filter=models.Q(adjustment_type="restoration")),
    )
    deductions = totals["deductions"] or Decimal("0.00")
    restorations = totals["restorations"] or Decimal("0.00")
    return {
        "total_deductions": deductions,
        "total_restorations": restorations,
        "net_adjustment": deductions - restorations,
    }
