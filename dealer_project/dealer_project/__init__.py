# Celery instance is defined in dealer_project/celery.py
# It is imported here so shared_task decorators bind to it
# as soon as Django starts
from .celery import celery_app

__all__ = ("celery_app",)

""" Start a worker with: "celery -A dealer_project worker -l info"
    -A dealer_project imports this module, which exposes celery_app. """
