"""
Webhook endpoint views for Paystack.

This module provides the HTTP endpoint for receiving Paystack webhooks.
The view:
1. Verifies the webhook signature over the raw body
2. Parses the body into a typed PaymentEvent
3. Applies subscription upgrades for charge.success (idempotent)
4. Acknowledges every other event without side effects

Usage:
    # In urls.py
    from payments.webhooks.views import paystack_webhook

    urlpatterns = [
        path("webhooks/paystack/", paystack_webhook, name="paystack_webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core.exceptions import AuthenticationError, PersistenceError, ValidationError
from payments.services import SubscriptionLedger
from payments.webhooks.events import parse_event
from payments.webhooks.signature import verify_signature

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def paystack_webhook(request: HttpRequest) -> HttpResponse:
    """
    Receive Paystack webhook events.

    Security:
    - Signature verified before the body is parsed or anything is written
    - CSRF exemption required for external webhooks
    - Only POST requests accepted

    Idempotency:
    - Transaction.reference is unique
    - A replayed charge.success answers 200 without touching the subscription

    Returns:
        HttpResponse with status:
        - 200: Event processed, replayed, or acknowledged
        - 400: Invalid payload, unknown account, or persistence failure
        - 401: Missing or invalid signature (empty body)
    """
    payload = request.body
    signature = request.headers.get("x-paystack-signature") or request.headers.get("x-signature")

    try:
        verify_signature(payload, signature, settings.PAYSTACK_SECRET_KEY)
    except AuthenticationError:
        return HttpResponse(status=401)

    try:
        event = parse_event(payload)
    except ValidationError as e:
        logger.warning(
            "Rejected malformed Paystack webhook",
            extra={"error_code": e.error_code},
        )
        return JsonResponse(e.to_dict(), status=400)

    logger.info(
        f"Received Paystack webhook: {event.kind}",
        extra={"event_type": event.kind, "reference": event.reference},
    )

    if not event.is_charge_success:
        return JsonResponse({"status": "Event Received"})

    try:
        result = SubscriptionLedger.apply_upgrade(
            account_id=event.metadata.account_id,
            plan_type=event.metadata.plan_type,
            amount_minor_units=event.amount,
            reference=event.reference,
        )
    except (ValidationError, PersistenceError) as e:
        logger.error(
            "Subscription upgrade failed",
            extra={"reference": event.reference, "error_code": e.error_code},
        )
        return JsonResponse(e.to_dict(), status=400)

    if result.data.replayed:
        logger.info(
            "Payment reference already applied, acknowledging replay",
            extra={"reference": event.reference},
        )

    return JsonResponse({"status": "Success"})
