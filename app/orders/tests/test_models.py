"""
Tests for the Order state machine.
"""

from datetime import timedelta

import pytest
from django.utils import timezone
from django_fsm import TransitionNotAllowed
from freezegun import freeze_time

from orders.models import OrderStatus, PayoutStatus
from orders.tests.factories import OrderFactory


@pytest.mark.django_db
class TestOrderTransitions:
    def test_new_order_is_pending_without_payout(self, order):
        assert order.status == OrderStatus.PENDING
        assert order.payout_status == PayoutStatus.NONE
        assert order.payout_eligible_at is None

    def test_happy_path(self, order):
        order.confirm_payment()
        order.mark_sent()
        order.confirm_receipt()

        assert order.status == OrderStatus.COMPLETED

    def test_cancel_only_from_pending(self, order):
        order.confirm_payment()

        with pytest.raises(TransitionNotAllowed):
            order.cancel()

    def test_cancelled_is_terminal(self, order):
        order.cancel()

        for event in ("confirm_payment", "mark_sent", "confirm_receipt", "cancel"):
            with pytest.raises(TransitionNotAllowed):
                getattr(order, event)()

    def test_cannot_skip_delivery(self, order):
        order.confirm_payment()

        with pytest.raises(TransitionNotAllowed):
            order.confirm_receipt()

    @freeze_time("2026-03-01 12:00:00")
    def test_confirm_receipt_opens_payout(self, settings):
        settings.PAYOUT_ELIGIBILITY_DELAY_MINUTES = 60
        order = OrderFactory(status=OrderStatus.DELIVERED)

        order.confirm_receipt()

        now = timezone.now()
        assert order.completed_at == now
        assert order.payout_status == PayoutStatus.PENDING
        assert order.payout_eligible_at == now + timedelta(minutes=60)

    @freeze_time("2026-03-01 12:00:00")
    def test_confirm_receipt_never_moves_eligibility_backwards(self, settings):
        settings.PAYOUT_ELIGIBILITY_DELAY_MINUTES = 60
        later = timezone.now() + timedelta(days=2)
        order = OrderFactory(status=OrderStatus.DELIVERED, payout_eligible_at=later)

        order.confirm_receipt()

        assert order.payout_eligible_at == later


@pytest.mark.django_db
class TestOrderProperties:
    def test_payout_reason_uses_short_id(self, order):
        assert order.payout_reason == f"Payout for Order #{str(order.id)[:8]}"

    @pytest.mark.parametrize(
        "payout_status,terminal",
        [
            (PayoutStatus.PAID, True),
            (PayoutStatus.FAILED, True),
            (PayoutStatus.MANUAL_REVIEW, True),
            (PayoutStatus.PENDING, False),
            (PayoutStatus.RETRY_QUEUED, False),
            (PayoutStatus.PROCESSING, False),
        ],
    )
    def test_terminal_payout_statuses(self, payout_status, terminal):
        order = OrderFactory(payout_status=payout_status)

        assert order.is_payout_terminal is terminal
