"""
Payment gateway exceptions.

Exception Hierarchy:
    ExternalServiceError (core)
    └── GatewayError - Base for all Paystack errors
        ├── TransientGatewayError - Temporary condition (e.g. insufficient
        │                           balance); the payout is retried later
        ├── TerminalGatewayError - Invalid recipient, validation, policy;
        │                          needs an operator
        └── GatewayTimeoutError - No answer; the transfer may or may not
                                  have happened and must be verified

Usage:
    from payments.exceptions import GatewayTimeoutError

    try:
        PaystackAdapter.initiate_transfer(...)
    except GatewayTimeoutError:
        # leave the claim in place for reconciliation
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ExternalServiceError

if TYPE_CHECKING:
    from typing import Any


class GatewayError(ExternalServiceError):
    """
    Base exception for payment gateway failures.

    Attributes:
        gateway_message: Message returned by the gateway, verbatim
        status_code: HTTP status returned by the gateway, if any
    """

    default_error_code: str = "GATEWAY_ERROR"
    is_retryable: bool = False

    def __init__(
        self,
        message: str,
        gateway_message: str | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.gateway_message = gateway_message or message
        self.status_code = status_code
        details = {**(details or {}), "status_code": status_code}
        super().__init__(message, error_code=error_code, details=details)


class TransientGatewayError(GatewayError):
    """The gateway refused for a reason expected to clear on its own."""

    default_error_code: str = "GATEWAY_TRANSIENT"
    is_retryable: bool = True


class TerminalGatewayError(GatewayError):
    """The gateway refused for a reason that will not clear without an operator."""

    default_error_code: str = "GATEWAY_TERMINAL"


class GatewayTimeoutError(GatewayError):
    """
    The request timed out or the connection dropped.

    The gateway may have accepted the request. Never treat this as a
    failure; verify the outcome against the gateway instead.
    """

    default_error_code: str = "GATEWAY_TIMEOUT"
