"""
Paystack API adapter for transfer operations.

This module provides the PaystackAdapter class which encapsulates all
outbound Paystack API calls. Every request carries the secret key as a
bearer token and an explicit timeout.

Features:
- Configurable timeouts on all API calls
- Translation of network failures and rate limits to domain exceptions
- Structured logging with timing metrics

Configuration (via settings):
- PAYSTACK_SECRET_KEY: Secret key (bearer token)
- PAYSTACK_BASE_URL: API base URL (default: https://api.paystack.co)
- PAYSTACK_API_TIMEOUT_SECONDS: API call timeout (default: 10)

Usage:
    from payments.adapters import PaystackAdapter

    response = PaystackAdapter.initiate_transfer(
        amount_minor=1999999,
        recipient="RCP_abc123",
        reason="Payout for Order #1a2b3c4d",
        reference="po_1a2b3c4d_9f8e7d6c",
    )
    if response.ok:
        ...
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from django.conf import settings

from payments.exceptions import (
    GatewayTimeoutError,
    TerminalGatewayError,
    TransientGatewayError,
)


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class TransferResponse:
    """
    An answered transfer request.

    Attributes:
        ok: Gateway accepted the transfer
        message: Gateway message, verbatim
        status_code: HTTP status code
        data: ``data`` object from the response body
    """

    ok: bool
    message: str
    status_code: int
    data: dict[str, Any] = field(default_factory=dict)


class TransferVerification:
    """Transfer states reported by ``verify_transfer``."""

    SUCCESS = "success"
    FAILED = "failed"
    REVERSED = "reversed"
    PENDING = "pending"
    NOT_FOUND = "not_found"


# =============================================================================
# Paystack Adapter
# =============================================================================


class PaystackAdapter:
    """
    Adapter for Paystack API operations.

    All methods are classmethods - no instance state is maintained.
    Thread-safe for use from Celery workers.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @staticmethod
    def _headers() -> dict[str, str]:
        return {
            "Authorization": f"Bearer {settings.PAYSTACK_SECRET_KEY}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _url(path: str) -> str:
        return f"{settings.PAYSTACK_BASE_URL.rstrip('/')}/{path.lstrip('/')}"

    @staticmethod
    def _timeout() -> float:
        return float(getattr(settings, "PAYSTACK_API_TIMEOUT_SECONDS", 10))

    # =========================================================================
    # Core Operations
    # =========================================================================

    @classmethod
    def initiate_transfer(
        cls,
        amount_minor: int,
        recipient: str,
        reason: str,
        reference: str,
    ) -> TransferResponse:
        """
        Transfer ``amount_minor`` from the Paystack balance to ``recipient``.

        Args:
            amount_minor: Amount in kobo
            recipient: Paystack transfer recipient code
            reason: Narration shown on the transfer
            reference: Unique reference; Paystack rejects duplicates

        Returns:
            TransferResponse for any answered 2xx/4xx request

        Raises:
            GatewayTimeoutError: Timeout, connection failure or 5xx; the
                transfer may have been accepted
            TransientGatewayError: Rate limited before the request was accepted
        """
        logger = cls.get_logger()
        log_context = {
            "operation": "initiate_transfer",
            "amount_minor": amount_minor,
            "transfer_reference": reference,
        }

        start_time = time.time()
        logger.info("Starting Paystack operation", extra=log_context)

        try:
            response = requests.post(
                cls._url("/transfer"),
                json={
                    "source": "balance",
                    "amount": amount_minor,
                    "recipient": recipient,
                    "reason": reason,
                    "reference": reference,
                },
                headers=cls._headers(),
                timeout=cls._timeout(),
            )
        except requests.RequestException as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_request_error(e, log_context, duration_ms)
            raise  # Never reached, but satisfies type checker

        duration_ms = (time.time() - start_time) * 1000
        cls._raise_for_unanswered(response, log_context, duration_ms)

        body = cls._json_body(response)
        ok = 200 <= response.status_code < 300 and bool(body.get("status"))
        message = str(body.get("message") or response.reason or "")

        logger.info(
            "Paystack operation completed",
            extra={
                **log_context,
                "status_code": response.status_code,
                "accepted": ok,
                "gateway_message": message,
                "duration_ms": duration_ms,
            },
        )

        return TransferResponse(
            ok=ok,
            message=message,
            status_code=response.status_code,
            data=body.get("data") or {},
        )

    @classmethod
    def verify_transfer(cls, reference: str) -> str:
        """
        Look up the state of a transfer by its reference.

        Returns:
            One of the TransferVerification values

        Raises:
            GatewayTimeoutError: Timeout, connection failure or 5xx
            TransientGatewayError: Rate limited
            TerminalGatewayError: Credentials rejected
        """
        logger = cls.get_logger()
        log_context = {"operation": "verify_transfer", "transfer_reference": reference}

        start_time = time.time()

        try:
            response = requests.get(
                cls._url(f"/transfer/verify/{reference}"),
                headers=cls._headers(),
                timeout=cls._timeout(),
            )
        except requests.RequestException as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_request_error(e, log_context, duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        cls._raise_for_unanswered(response, log_context, duration_ms)

        if response.status_code == 404:
            logger.info("Transfer not found at gateway", extra=log_context)
            return TransferVerification.NOT_FOUND

        body = cls._json_body(response)
        if response.status_code in (401, 403):
            raise TerminalGatewayError(
                "Paystack rejected credentials",
                gateway_message=body.get("message"),
                status_code=response.status_code,
            )

        data = body.get("data") or {}
        if not body.get("status") or not data:
            # Paystack answers 400 "Transfer not found" for unknown references
            logger.info("Transfer not found at gateway", extra=log_context)
            return TransferVerification.NOT_FOUND

        state = str(data.get("status", "")).lower()
        logger.info(
            "Paystack transfer verified",
            extra={**log_context, "transfer_state": state, "duration_ms": duration_ms},
        )
        if state in (
            TransferVerification.SUCCESS,
            TransferVerification.FAILED,
            TransferVerification.REVERSED,
        ):
            return state
        return TransferVerification.PENDING

    # =========================================================================
    # Error Handling
    # =========================================================================

    @staticmethod
    def _json_body(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"message": response.text[:500]}
        return body if isinstance(body, dict) else {}

    @classmethod
    def _raise_for_unanswered(
        cls,
        response: requests.Response,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """Raise for responses that carry no decision about the transfer."""
        logger = cls.get_logger()
        log_context = {
            **log_context,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }

        if response.status_code == 429:
            logger.warning("Rate limited by Paystack", extra=log_context)
            raise TransientGatewayError(
                "Paystack rate limit exceeded. Please retry.",
                status_code=429,
                error_code="GATEWAY_RATE_LIMITED",
            )

        if response.status_code >= 500:
            logger.error("Paystack server error", extra=log_context)
            raise GatewayTimeoutError(
                "Paystack returned a server error",
                gateway_message=response.text[:500],
                status_code=response.status_code,
            )

    @classmethod
    def _handle_request_error(
        cls,
        error: requests.RequestException,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate requests exceptions to domain exceptions.

        Raises:
            GatewayTimeoutError: Always; the request may have reached Paystack
        """
        logger = cls.get_logger()
        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, requests.Timeout):
            logger.error("Paystack request timed out", extra=log_context)
            raise GatewayTimeoutError(
                "Paystack request timed out",
                error_code="GATEWAY_TIMEOUT",
            ) from error

        logger.error(
            f"Paystack request failed: {type(error).__name__}",
            extra=log_context,
            exc_info=True,
        )
        raise GatewayTimeoutError(
            "Could not reach Paystack",
            error_code="GATEWAY_UNREACHABLE",
        ) from error
