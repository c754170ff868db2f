import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from ..exceptions import InvalidDivisionError, MonthNotClosedError
from ..models import OperationalExpense
from .audit_helper import log_action
from .modal import update_company_modal
from .periods import ensure_month_open, is_month_closed, month_label
from .posting import post_ledger_entry, remove_ledger_entries
from .profit import deduct_profit, restore_profit

logger = logging.getLogger(__name__)

OP_GLOBAL = "OP Global"


def is_modal_reducing(category):
    return "Kurang Modal" in category or category == OP_GLOBAL


def is_profit_reducing(category):
    return "Kurang Profit" in category


def is_retroactive(category):
    return is_modal_reducing(category) or is_profit_reducing(category)


def _description(category, description, target_month=None):
    text = f"{category} - {description}"
    if target_month is not None:
        text += f" (Retroaktif - Masuk ke: {month_label(target_month.month)} {target_month.year})"
    return text


def _ledger_description(expense):
    # retroactive rows already store the full "<category> - ..." text
    if expense.is_retroactive:
        return expense.description
    return _description(expense.category, expense.description)


# ----------------------------
# Operational expense workflows
# ----------------------------
def record_operational_expense(*, company_id, branch_id, division, category, description,
                               amount, date, target_month=None, user=None):
    """
    Post one operational expense.

    Normal categories: dated `date`, must fall in an open month, debit the
    company's modal and the books.
    Retroactive categories charge a month that is already closed
    (`target_month`, any day of that month):
        - "... Kurang Modal" / "OP Global": booked on the target month,
          modal debited now.
        - "... Kurang Profit": no modal or book entry, the profit of the
          target month is reduced instead.
    """
    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValidationError("Nominal harus > 0")
    if division not in settings.DEALER_DIVISIONS:
        raise InvalidDivisionError(f"Divisi tidak valid: {division}")

    retroactive = is_retroactive(category)
    if retroactive:
        if target_month is None:
            raise ValidationError("Bulan target wajib diisi untuk kategori retroaktif")
        target_month = target_month.replace(day=1)
        if not is_month_closed(target_month.month, target_month.year, division):
            raise MonthNotClosedError("Bulan target yang dipilih belum di-close atau tidak valid")
        if is_modal_reducing(category):
            entry_date = target_month
        else:
            # the expense row itself lives in the current, open month
            entry_date = date
            ensure_month_open(entry_date, division)
    else:
        target_month = None
        entry_date = date
        ensure_month_open(entry_date, division)

    with transaction.atomic():
        expense = OperationalExpense.objects.create(
            company_id=company_id,
            branch_id=branch_id,
            division=division,
            category=category,
            description=_description(category, description, target_month) if retroactive else description,
            amount=amount,
            date=entry_date,
            is_retroactive=retroactive,
            original_month=target_month,
        )

        if is_profit_reducing(category):
            deduct_profit(expense.pk, target_month, division, category, description, amount, user=user)
        else:
            update_company_modal(company_id, -amount, description=_description(category, description),
                                 date=date, user=user)
            post_ledger_entry(
                division=division,
                date=entry_date,
                description=_description(category, description, target_month),
                debit=amount,
                company=expense.company,
                branch=expense.branch,
                origin_type="operational",
                origin_id=expense.pk,
            )

        log_action(action="operational_post", instance=expense, user=user,
                   changes={"category": category, "amount": str(amount), "date": str(entry_date)})

    logger.info("operational %s posted: %s %s", expense.pk, category, amount)
    return expense


def update_operational_expense(expense_id, *, amount=None, description=None, date=None, user=None):
    """
    Change amount, description or date of an expense.
    The modal receives the difference (old - new) and the book line is
    re-posted; profit-reducing entries swap their deduction.
    """
    with transaction.atomic():
        expense = OperationalExpense.objects.select_for_update().get(pk=expense_id)
        if not expense.is_retroactive:
            ensure_month_open(expense.date, expense.division)
            if date is not None:
                ensure_month_open(date, expense.division)

        old_amount = expense.amount
        new_amount = Decimal(str(amount)) if amount is not None else old_amount
        if new_amount <= 0:
            raise ValidationError("Nominal harus > 0")

        if description is not None:
            if expense.is_retroactive:
                description = _description(expense.category, description, expense.original_month)
            expense.description = description
        if date is not None and not expense.is_retroactive:
            expense.date = date
        expense.amount = new_amount
        expense.touch()
        expense.save()

        if is_profit_reducing(expense.category):
            restore_profit(expense.pk, user=user)
            deduct_profit(expense.pk, expense.original_month, expense.division, expense.category,
                          expense.description, new_amount, user=user)
        else:
            difference = old_amount - new_amount
            if difference:
                update_company_modal(expense.company_id, difference,
                                     description=f"Edit {_ledger_description(expense)}",
                                     user=user)
            remove_ledger_entries("operational", expense.pk)
            post_ledger_entry(
                division=expense.division,
                date=expense.date,
                description=_ledger_description(expense),
                debit=new_amount,
                company=expense.company,
                branch=expense.branch,
                origin_type="operational",
                origin_id=expense.pk,
            )

        log_action(action="operational_update", instance=expense, user=user,
                   changes={"before": str(old_amount), "after": str(new_amount)})
    return expense


def delete_operational_expense(expense_id, user=None):
    """Delete an expense and give back what it took (modal or profit)."""
    with transaction.atomic():
        expense = OperationalExpense.objects.select_for_update().get(pk=expense_id)
        if not expense.is_retroactive:
            ensure_month_open(expense.date, expense.division)

        if is_profit_reducing(expense.category):
            restore_profit(expense.pk, user=user)
        else:
            remove_ledger_entries("operational", expense.pk)
            update_company_modal(expense.company_id, expense.amount,
                                 description=f"Hapus {_ledger_description(expense)}",
                                 user=user)

        log_action(action="operational_delete", instance=expense, user=user,
                   changes={"amount": str(expense.amount)})
        expense.delete()
