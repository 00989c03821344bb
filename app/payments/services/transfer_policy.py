"""
Classification of gateway transfer responses into payout outcomes.

Pure functions only: no database access, no clock reads. The payout
executor supplies ``now`` and persists whatever outcome comes back.

    Paid          gateway accepted the transfer
    RetryQueued   insufficient balance or rate limit; try again after a fixed delay
    Failed        any other refusal; reason kept verbatim for operators
    ManualReview  RetryQueued past the attempt cap
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from payments.adapters import TransferResponse


@dataclass(frozen=True)
class Paid:
    pass


@dataclass(frozen=True)
class RetryQueued:
    delay: timedelta
    reason: str
    eligible_at: datetime


@dataclass(frozen=True)
class Failed:
    reason: str


@dataclass(frozen=True)
class ManualReview:
    reason: str


TransferOutcome = Union[Paid, RetryQueued, Failed, ManualReview]


def next_eligible_at(previous: datetime | None, now: datetime, delay: timedelta) -> datetime:
    """Eligibility after a retry: never earlier than before, always later than now."""
    base = now if previous is None else max(previous, now)
    return base + delay


def retry_later(
    reason: str,
    now: datetime,
    retry_delay: timedelta,
    previous_eligible_at: datetime | None = None,
) -> RetryQueued:
    return RetryQueued(
        delay=retry_delay,
        reason=reason,
        eligible_at=next_eligible_at(previous_eligible_at, now, retry_delay),
    )


def is_balance_failure(message: str | None) -> bool:
    return "balance" in (message or "").lower()


def classify(
    response: TransferResponse,
    now: datetime,
    retry_delay: timedelta,
    previous_eligible_at: datetime | None = None,
) -> TransferOutcome:
    """
    Map an answered transfer request to an outcome.

    Args:
        response: The gateway's answer
        now: Current time
        retry_delay: Fixed delay before a balance failure is retried
        previous_eligible_at: The order's current eligibility time, if any
    """
    if response.ok:
        return Paid()

    message = response.message or "Transfer rejected by gateway"
    if is_balance_failure(message):
        return retry_later(message, now, retry_delay, previous_eligible_at)

    return Failed(reason=message)


def apply_retry_cap(outcome: TransferOutcome, attempts: int, max_attempts: int) -> TransferOutcome:
    """Turn a RetryQueued into ManualReview once ``attempts`` reaches ``max_attempts``."""
    if isinstance(outcome, RetryQueued) and attempts >= max_attempts:
        return ManualReview(
            reason=f"Retry limit of {max_attempts} attempts reached. Last error: {outcome.reason}"
        )
    return outcome
