from django.db import transaction
from django.db.models import F

from ..exceptions import InsufficientStockError
from ..models import MotorType


def increment_qty(motor_type_id):
    # a purchase put one more unit of this type in stock
    MotorType.objects.filter(pk=motor_type_id).update(qty=F("qty") + 1)
    return MotorType.objects.get(pk=motor_type_id)


def decrement_qty(motor_type_id):
    # a sale took one unit out; stock never goes below zero
    with transaction.atomic():
        motor_type = MotorType.objects.select_for_update().get(pk=motor_type_id)
        if motor_type.qty <= 0:
            raise InsufficientStockError(f"Stok {motor_type} sudah habis")
        motor_type.qty -= 1
        motor_type.save(update_fields=["qty"])
    return motor_type
