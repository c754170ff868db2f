from django.db import models

ALL_DIVISIONS = "all"


# -----------------------------------------
# Division scoping for every record that
# belongs to a business unit
# -----------------------------------------
class DivisionQuerySet(models.QuerySet):

    def for_division(self, division):
        # "all" (or nothing) means no division filter
        if not division or division == ALL_DIVISIONS:
            return self
        return self.filter(division=division)

    def between(self, field, start, end):
        # half-open date range [start, end)
        return self.filter(**{f"{field}__gte": start, f"{field}__lt": end})


class DivisionManager(models.Manager):

    def get_queryset(self):
        return DivisionQuerySet(self.model, using=self._db)

    def for_division(self, division):
        return self.get_queryset().for_division(division)

    def between(self, field, start, end):
        return self.get_queryset().between(field, start, end)

    # every movable model can call:
    # Purchase.objects.for_division("sport").between("purchase_date", start, end)


class ClosedPeriodQuerySet(DivisionQuerySet):

    def closed_in(self, month, year):
        return self.filter(closed_month=month, closed_year=year)


class HistoryManager(DivisionManager):
    """Manager for history tables (rows tagged with the closed period)."""

    def get_queryset(self):
        return ClosedPeriodQuerySet(self.model, using=self._db)

    def closed_in(self, month, year):
        return self.get_queryset().closed_in(month, year)
