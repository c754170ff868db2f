from django.core.exceptions import ValidationError
from django.db.models.signals import pre_delete, pre_save
from django.dispatch import receiver

from .models import BrokerageJob, Installment, MonthlyClosure, Purchase, Sale
from .services.movable import MOVABLE_KINDS, normalize_status

""" Store statuses in their canonical spelling so closing filters match them."""

STATUS_KIND = {
    Purchase: "pembelian",
    Sale: "penjualan",
    Installment: "cicilan",
    BrokerageJob: "biro_jasa",
}


@receiver(pre_save, sender=Purchase)
@receiver(pre_save, sender=Sale)
@receiver(pre_save, sender=Installment)
@receiver(pre_save, sender=BrokerageJob)
def normalize_record_status(sender, instance, **kwargs):
    instance.status = normalize_status(STATUS_KIND[sender], instance.status)


"""Block closure deletion while history rows of its month still exist."""


@receiver(pre_delete, sender=MonthlyClosure)
def prevent_delete_closure_with_history(sender, instance, **kwargs):
    month, year = instance.closure_month, instance.closure_year
    if any(kind.closed(month, year).exists() for kind in MOVABLE_KINDS):
        raise ValidationError(
            "Cannot delete a closure while its month still has history rows; restore it first."
        )
