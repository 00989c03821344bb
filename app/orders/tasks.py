"""
Celery tasks for orders.
"""

import logging

from celery import shared_task

from orders.services import OrderService

logger = logging.getLogger(__name__)


@shared_task
def reconcile_deal_statuses() -> dict:
    """
    Periodic sweep repairing conversations that drifted from their order.

    Scheduled every 10 minutes by django-celery-beat.
    """
    summary = OrderService.reconcile_deal_statuses()
    if summary["corrected"]:
        logger.warning("Deal status drift repaired", extra=summary)
    return summary
