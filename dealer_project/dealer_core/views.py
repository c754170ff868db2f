import json
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from .forms import (ClosePeriodForm, ModalAdjustmentForm, PreviewForm,
                    ProfitDeductionForm, ProfitRestoreForm, RestorePeriodForm)
from .services import closing
from .services.modal import update_company_modal
from .services.periods import closed_months, parse_period
from .services.profit import deduct_profit, restore_profit

logger = logging.getLogger(__name__)


def _payload(request):
    # API clients send JSON, admin-style forms send POST data
    if request.content_type == "application/json":
        try:
            return json.loads(request.body or b"{}")
        except ValueError:
            raise ValidationError("Body is not valid JSON")
    return request.POST


def _error(exc, status=400):
    if isinstance(exc, ValidationError):
        message = "; ".join(exc.messages)
    else:
        message = str(exc)
    return JsonResponse({"ok": False, "error": message}, status=status)


def _form_error(form):
    messages = [f"{field}: {error}" for field, errors in form.errors.items() for error in errors]
    return JsonResponse({"ok": False, "error": "; ".join(messages)}, status=400)


# ----------------------------
# Reads
# ----------------------------
@require_GET
def closure_status_view(request):
    try:
        month, year = parse_period(request.GET.get("month"), request.GET.get("year"))
        exists = closing.closure_exists(month, year)
    except ValidationError as e:
        return _error(e)
    return JsonResponse({"ok": True, "month": month, "year": year, "is_closed": exists})


@require_GET
def preview_close_view(request):
    form = PreviewForm(request.GET)
    if not form.is_valid():
        return _form_error(form)
    # the query string wins over the division picked for the session
    division = form.cleaned_data["division"] or getattr(request, "division", None) or "all"
    try:
        counts = closing.preview_close(form.cleaned_data["month"], form.cleaned_data["year"], division)
    except ValidationError as e:
        return _error(e)
    return JsonResponse({"ok": True, "division": division, "counts": counts})


@require_GET
def closed_months_view(request):
    return JsonResponse({"ok": True, "months": closed_months()})


# ----------------------------
# Procedures
# ----------------------------
@require_POST
def close_month_view(request):
    try:
        form = ClosePeriodForm(_payload(request))
        if not form.is_valid():
            return _form_error(form)
        data = form.cleaned_data
        result = closing.close_month(data["month"], data["year"], notes=data["notes"], user=request.user)
    except ValidationError as e:
        logger.warning("close_month rejected: %s", e)
        return _error(e)
    return JsonResponse({"ok": True, **result})


@require_POST
def restore_month_view(request):
    try:
        form = RestorePeriodForm(_payload(request))
        if not form.is_valid():
            return _form_error(form)
        data = form.cleaned_data
        result = closing.restore_month(data["month"], data["year"], data["division"], user=request.user)
    except ValidationError as e:
        logger.warning("restore_month rejected: %s", e)
        return _error(e)
    return JsonResponse({"ok": True, **result})


@require_POST
def update_company_modal_view(request):
    try:
        form = ModalAdjustmentForm(_payload(request))
        if not form.is_valid():
            return _form_error(form)
        data = form.cleaned_data
        company = update_company_modal(
            data["company_id"], data["amount"],
            description=data["description"], date=data["date"], user=request.user,
        )
    except ObjectDoesNotExist as e:
        return _error(e, status=404)
    except ValidationError as e:
        return _error(e)
    return JsonResponse({"ok": True, "company_id": company.pk, "modal": str(company.modal)})


@require_POST
def deduct_profit_view(request):
    try:
        form = ProfitDeductionForm(_payload(request))
        if not form.is_valid():
            return _form_error(form)
        data = form.cleaned_data
        adjustment = deduct_profit(
            data["operational_id"], data["date"], data["division"], data["category"],
            data["description"], data["amount"], user=request.user,
        )
    except ValidationError as e:
        return _error(e)
    return JsonResponse({"ok": True, "id": adjustment.pk, "amount": str(adjustment.amount)})


@require_POST
def restore_profit_view(request):
    try:
        form = ProfitRestoreForm(_payload(request))
        if not form.is_valid():
            return _form_error(form)
        restoration = restore_profit(form.cleaned_data["operational_id"], user=request.user)
    except ValidationError as e:
        return _error(e)
    return JsonResponse({"ok": True, "id": restoration.pk, "amount": str(restoration.amount)})
