"""
Tests for order Celery tasks.
"""

import pytest

from chat.models import Conversation
from orders.models import OrderStatus
from orders.tasks import reconcile_deal_statuses
from orders.tests.factories import OrderFactory


@pytest.mark.django_db
def test_reconcile_deal_statuses_task_repairs_drift():
    order = OrderFactory(status=OrderStatus.COMPLETED)
    Conversation.objects.filter(order=order).update(deal_status=OrderStatus.DELIVERED)

    summary = reconcile_deal_statuses()

    assert summary["corrected"] == 1
    assert Conversation.objects.get(order=order).deal_status == OrderStatus.COMPLETED


@pytest.mark.django_db
def test_reconcile_deal_statuses_is_registered_for_beat():
    from django_celery_beat.models import PeriodicTask

    task = PeriodicTask.objects.get(name="Reconcile Deal Statuses")

    assert task.task == "orders.tasks.reconcile_deal_statuses"
    assert task.interval.every == 10
