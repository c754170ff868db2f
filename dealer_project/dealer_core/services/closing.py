"""
Month-end closing.

close_month moves every finished record of a month from the active tables
into the history tables and records one MonthlyClosure with the counts.
restore_month is the inverse for one division and reopens the month for
it; the next close_month of the period closes that division again. Both
run as a single database transaction: either every kind moves or nothing
does.

Neither operation touches Company.modal. Rows are relocated, not
reversed, so balances posted when the records were created stay valid.
"""
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from ..exceptions import (InvalidDivisionError, MonthAlreadyClosedError,
                          MonthNotClosedError)
from ..managers import ALL_DIVISIONS
from ..models import MonthlyClosure
from .audit_helper import log_action
from .movable import MOVABLE_KINDS
from .periods import month_label, parse_period

logger = logging.getLogger(__name__)


def _actor(user):
    # created_by only accepts real, logged-in users
    if user is not None and getattr(user, "is_authenticated", False):
        return user
    return None


def _require_division(division):
    if not division or division == ALL_DIVISIONS:
        raise InvalidDivisionError("Pilih divisi terlebih dahulu untuk restore bulan")
    division = division.strip().lower()
    if division not in settings.DEALER_DIVISIONS:
        raise InvalidDivisionError(f"Divisi tidak dikenal: {division}")
    return division


# ----------------------------
# Read-only checks
# ----------------------------
def closure_exists(month, year):
    month, year = parse_period(month, year)
    return MonthlyClosure.objects.filter(closure_month=month, closure_year=year).exists()


def preview_close(month, year, division=ALL_DIVISIONS):
    """
    Count, per kind, the active rows a close of (month, year) would move.
    Pure reads; division "all" counts every division.
    """
    month, year = parse_period(month, year)
    return {
        kind.key: kind.eligible(month, year, division).count()
        for kind in MOVABLE_KINDS
        if kind.in_preview
    }


# ----------------------------
# Row movers
# ----------------------------
def _move_to_history(kind, month, year, closed_at, division=ALL_DIVISIONS):
    # lock the rows so nothing edits them while they move
    rows = list(kind.eligible(month, year, division).select_for_update().order_by("pk"))
    if not rows:
        return 0

    fields = kind.business_fields()
    kind.history.objects.bulk_create([
        kind.history(
            source_id=row.pk,
            closed_month=month,
            closed_year=year,
            closed_at=closed_at,
            **{name: getattr(row, name) for name in fields},
        )
        for row in rows
    ])
    kind.active.objects.filter(pk__in=[row.pk for row in rows]).delete()
    return len(rows)


def _move_to_active(kind, month, year, division):
    rows = list(kind.closed(month, year, division).select_for_update().order_by("pk"))
    if not rows:
        return 0

    fields = kind.business_fields()
    # original primary keys come back, so plain-id links stay valid
    kind.active.objects.bulk_create([
        kind.active(pk=row.source_id, **{name: getattr(row, name) for name in fields})
        for row in rows
    ])
    kind.history.objects.filter(pk__in=[row.pk for row in rows]).delete()
    return len(rows)


# ----------------------------
# Close / restore workflows
# ----------------------------
def close_month(month, year, notes=None, user=None):
    """
    Close one calendar month for every division.
    Workflow:
        1. Refuse if the month already has a MonthlyClosure, unless divisions
           were restored since; then only those divisions are closed again
           and their counts are added to the existing closure.
        2. For each kind, copy eligible rows into history tagged with
           (month, year, closed_at) and delete them from the active table.
        3. Insert the MonthlyClosure with the per-kind counts.
        4. Return {"month", "year", "records_moved": {...}}.
    """
    month, year = parse_period(month, year)

    with transaction.atomic():
        closure = MonthlyClosure.objects.select_for_update().filter(
            closure_month=month, closure_year=year
        ).first()
        if closure is not None and not closure.reopened_divisions:
            raise MonthAlreadyClosedError(
                f"Bulan {month_label(month)} {year} sudah di-close"
            )

        closed_at = timezone.now()
        if closure is not None:
            return _reclose(closure, closed_at, notes, user)

        moved = {}
        for kind in MOVABLE_KINDS:
            moved[kind.key] = _move_to_history(kind, month, year, closed_at)

        try:
            # savepoint: a concurrent close that won the race surfaces
            # as a duplicate instead of a broken transaction
            with transaction.atomic():
                closure = MonthlyClosure.objects.create(
                    closure_month=month,
                    closure_year=year,
                    closure_date=closed_at,
                    notes=notes or None,
                    created_by=_actor(user),
                    **{kind.counter: moved[kind.key] for kind in MOVABLE_KINDS},
                )
        except IntegrityError:
            raise MonthAlreadyClosedError(
                f"Bulan {month_label(month)} {year} sudah di-close"
            )

        result = {"month": month, "year": year, "records_moved": moved}
        log_action(action="close_month", instance=closure, user=_actor(user), changes=result)

    logger.info("closed %s-%02d: %s", year, month, moved)
    return result


def _reclose(closure, closed_at, notes, user):
    # runs inside close_month's transaction, closure row already locked
    month, year = closure.closure_month, closure.closure_year
    divisions = list(closure.reopened_divisions)

    moved = {}
    for kind in MOVABLE_KINDS:
        moved[kind.key] = sum(
            _move_to_history(kind, month, year, closed_at, division) for division in divisions
        )
        setattr(closure, kind.counter, getattr(closure, kind.counter) + moved[kind.key])

    closure.reopened_divisions = []
    closure.closure_date = closed_at
    if notes:
        closure.notes = notes
    closure.save()

    result = {"month": month, "year": year, "records_moved": moved}
    log_action(action="close_month", instance=closure, user=_actor(user),
               changes={**result, "divisions": divisions})
    logger.info("re-closed %s-%02d for %s: %s", year, month, divisions, moved)
    return result


def restore_month(month, year, division, user=None):
    """
    Move one division's history rows of (month, year) back to the active tables.
    The closure counters drop by what came back and the division is marked
    reopened, so it accepts postings for the month until the next close.
    The MonthlyClosure is deleted once no history row of the month is left
    in any division.
    """
    month, year = parse_period(month, year)
    division = _require_division(division)

    with transaction.atomic():
        closure = MonthlyClosure.objects.select_for_update().filter(
            closure_month=month, closure_year=year
        ).first()
        if closure is None:
            raise MonthNotClosedError(
                f"Bulan {month_label(month)} {year} belum di-close"
            )

        restored = {}
        for kind in MOVABLE_KINDS:
            restored[kind.key] = _move_to_active(kind, month, year, division)

        for kind in MOVABLE_KINDS:
            current = getattr(closure, kind.counter)
            setattr(closure, kind.counter, max(0, current - restored[kind.key]))

        result = {
            "month": month,
            "year": year,
            "division": division,
            "records_restored": restored,
        }
        log_action(action="restore_month", instance=closure, user=_actor(user), changes=result)

        still_closed = any(kind.closed(month, year).exists() for kind in MOVABLE_KINDS)
        if still_closed:
            if not closure.is_open_for(division):
                closure.reopened_divisions = [*closure.reopened_divisions, division]
            closure.save(update_fields=[kind.counter for kind in MOVABLE_KINDS] + ["reopened_divisions"])
        else:
            closure.delete()

    logger.info("restored %s-%02d (%s): %s", year, month, division, restored)
    return result
