from django.db import models
from django.utils import timezone

from ..managers import DivisionManager, HistoryManager


# ---------- Shared columns ----------
class TimestampedModel(models.Model):
    # Plain defaults instead of auto_now/auto_now_add:
    # rows are copied between active and history tables and
    # must keep their original timestamps
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        abstract = True

    def touch(self):
        self.updated_at = timezone.now()


class DivisionModel(TimestampedModel):
    # business unit tag ("sport" / "start")
    division = models.CharField(max_length=20, db_index=True)

    objects = DivisionManager()

    class Meta:
        abstract = True


class ClosedPeriodModel(models.Model):
    """
    Columns every history table adds on top of the business columns.
    source_id keeps the primary key the row had in the active table
    so a restore can put it back under the same id.
    """
    source_id = models.BigIntegerField(db_index=True)
    closed_month = models.PositiveSmallIntegerField()
    closed_year = models.PositiveSmallIntegerField()
    closed_at = models.DateTimeField(default=timezone.now)

    objects = HistoryManager()

    class Meta:
        abstract = True
