import datetime

from django.core.exceptions import ValidationError

from ..exceptions import ClosedPeriodError
from ..managers import ALL_DIVISIONS
from ..models.closure import MonthlyClosure

MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


def month_label(month):
    # 8 -> "Agustus"
    return MONTH_NAMES[int(month) - 1]


def parse_period(month, year):
    """
    Turn raw month/year input (ints or numeric strings) into ints.
    Raises ValidationError when either is missing or not a number.
    """
    if month in (None, "") or year in (None, ""):
        raise ValidationError("Silakan masukkan bulan dan tahun yang valid")
    try:
        month, year = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Silakan masukkan bulan dan tahun yang valid")
    if not 1 <= month <= 12:
        raise ValidationError(f"Bulan tidak valid: {month}")
    return month, year


def month_range(year, month):
    """
    Half-open date range covering one month: [first day, first day of next month).
    December wraps to January 1st of the following year.
    """
    start = datetime.date(year, month, 1)
    if month == 12:
        end = datetime.date(year + 1, 1, 1)
    else:
        end = datetime.date(year, month + 1, 1)
    return start, end


def is_month_closed(month, year, division=None):
    """
    True once (month, year) has a MonthlyClosure. Given a concrete division,
    a division restored since the close counts as open again.
    """
    closure = MonthlyClosure.objects.filter(closure_month=month, closure_year=year).first()
    if closure is None:
        return False
    if not division or division == ALL_DIVISIONS:
        return True
    return not closure.is_open_for(division)


def closed_months():
    """Closed periods as "YYYY-MM" strings, newest first."""
    rows = MonthlyClosure.objects.order_by("-closure_year", "-closure_month").values_list(
        "closure_year", "closure_month"
    )
    return [f"{year}-{month:02d}" for year, month in rows]


"""
    Posting date determines the period.
    Nothing new may be dated inside a month whose books are closed.
"""
def ensure_month_open(date, division=None):
    if is_month_closed(date.month, date.year, division):
        raise ClosedPeriodError(
            f"Bulan {month_label(date.month)} {date.year} sudah di-close"
        )
