import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task  # register this function as a Celery task
def reconcile_company_modal(company_id):
    """
    Compare a company's stored modal with the sum of its modal history
    and record any drift. Nothing is corrected automatically.
    """
    # import lazily to avoid circular imports at module import time
    from .models import Company
    from .services.audit_helper import log_action
    from .services.modal import modal_balance_from_history

    company = Company.objects.get(pk=company_id)
    expected = modal_balance_from_history(company)
    drift = company.modal - expected

    if drift:
        logger.warning("modal drift on company %s: stored %s, history %s",
                       company.pk, company.modal, expected)
        log_action(action="modal_drift", instance=company,
                   changes={"stored": str(company.modal), "history": str(expected),
                            "drift": str(drift)})
    return {"company_id": company.pk, "modal": str(company.modal),
            "history": str(expected), "drift": str(drift)}
