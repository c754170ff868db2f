from decimal import Decimal

from ..models import LedgerEntry


# ------------------------------------
# Bookkeeping (pembukuan) lines
# ------------------------------------
def post_ledger_entry(*, division, date, description, debit=Decimal("0.00"),
                      credit=Decimal("0.00"), company=None, branch=None,
                      origin_type="", origin_id=None, purchase_id=None):
    # debit = money out of the company, credit = money in
    return LedgerEntry.objects.create(
        division=division,
        date=date,
        description=description,
        debit=debit,
        credit=credit,
        company=company,
        branch=branch,
        origin_type=origin_type,
        origin_id=origin_id,
        purchase_id=purchase_id,
    )


def remove_ledger_entries(origin_type, origin_id):
    """Delete the active bookkeeping lines created for one source record."""
    deleted, _ = LedgerEntry.objects.filter(origin_type=origin_type, origin_id=origin_id).delete()
    return deleted
