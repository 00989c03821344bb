"""
Tests for transfer outcome classification.

Pure functions: no database, fixed clock values.
"""

from datetime import datetime, timedelta, timezone

import pytest

from payments.adapters import TransferResponse
from payments.services.transfer_policy import (
    Failed,
    ManualReview,
    Paid,
    RetryQueued,
    apply_retry_cap,
    classify,
    is_balance_failure,
    next_eligible_at,
    retry_later,
)

NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)
HOUR = timedelta(hours=1)


def _response(ok=False, message=""):
    return TransferResponse(ok=ok, message=message, status_code=200 if ok else 400)


class TestClassify:
    def test_accepted_transfer_is_paid(self):
        assert classify(_response(ok=True, message="Transfer has been queued"), NOW, HOUR) == Paid()

    def test_balance_failure_is_retried_after_delay(self):
        message = "Your balance is not enough to fulfil this request"

        outcome = classify(_response(message=message), NOW, HOUR)

        assert isinstance(outcome, RetryQueued)
        assert outcome.eligible_at == NOW + HOUR
        assert outcome.delay == HOUR
        assert outcome.reason == message

    def test_balance_match_is_case_insensitive(self):
        assert isinstance(classify(_response(message="Insufficient BALANCE"), NOW, HOUR), RetryQueued)

    def test_other_failure_keeps_message_verbatim(self):
        outcome = classify(_response(message="Recipient specified is invalid"), NOW, HOUR)

        assert outcome == Failed(reason="Recipient specified is invalid")

    def test_failure_without_message_gets_generic_reason(self):
        assert classify(_response(message=""), NOW, HOUR) == Failed(reason="Transfer rejected by gateway")

    def test_retry_never_moves_eligibility_earlier(self):
        later = NOW + timedelta(hours=5)

        outcome = classify(_response(message="low balance"), NOW, HOUR, previous_eligible_at=later)

        assert outcome.eligible_at == later + HOUR


class TestNextEligibleAt:
    @pytest.mark.parametrize(
        "previous,expected",
        [
            (None, NOW + HOUR),
            (NOW - timedelta(days=1), NOW + HOUR),
            (NOW + timedelta(hours=3), NOW + timedelta(hours=4)),
        ],
    )
    def test_is_after_both_now_and_previous(self, previous, expected):
        assert next_eligible_at(previous, NOW, HOUR) == expected


def test_retry_later_keeps_reason_and_schedules_after_delay():
    outcome = retry_later("Rate limited", NOW, HOUR)

    assert outcome == RetryQueued(delay=HOUR, reason="Rate limited", eligible_at=NOW + HOUR)


class TestApplyRetryCap:
    def _retry(self):
        return RetryQueued(delay=HOUR, reason="Insufficient Paystack Balance", eligible_at=NOW + HOUR)

    def test_below_cap_keeps_retry(self):
        outcome = self._retry()

        assert apply_retry_cap(outcome, attempts=2, max_attempts=3) is outcome

    def test_at_cap_becomes_manual_review(self):
        outcome = apply_retry_cap(self._retry(), attempts=3, max_attempts=3)

        assert isinstance(outcome, ManualReview)
        assert outcome.reason.startswith("Retry limit of 3 attempts reached.")
        assert "Insufficient Paystack Balance" in outcome.reason

    @pytest.mark.parametrize("outcome", [Paid(), Failed(reason="Recipient specified is invalid")])
    def test_other_outcomes_pass_through(self, outcome):
        assert apply_retry_cap(outcome, attempts=99, max_attempts=3) is outcome


def test_is_balance_failure_handles_none():
    assert not is_balance_failure(None)
