"""
Internal notification dispatch endpoint.

POST /api/v1/notifications/dispatch/

Called by other services (database hooks, cron) with a shared bearer
token, not by end users.
"""

from __future__ import annotations

import hmac
import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from notifications import sweeps
from notifications.serializers import (
    EXPIRY_CHECK,
    DispatchErrorResponseSerializer,
    DispatchRequestSerializer,
    DispatchResponseSerializer,
)
from notifications.services import NotificationDispatcher

logger = logging.getLogger(__name__)


def _verify_bearer(header: str, token: str) -> bool:
    if not token:
        logger.warning("Dispatch token not configured, rejecting request")
        return False

    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer" or not credentials:
        return False
    return hmac.compare_digest(credentials.strip(), token)


class NotificationDispatchView(APIView):
    """
    Accept a domain event and turn it into push notifications.

    Requires ``Authorization: Bearer <NOTIFICATION_DISPATCH_TOKEN>``.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="dispatch_notification",
        summary="Dispatch notification",
        description=(
            "Internal endpoint. Accepts a row change ({table, record}), "
            "an expiry sweep trigger ({type: EXPIRY_CHECK}) or a money event "
            "({type, userId, amount, orderId})."
        ),
        request=DispatchRequestSerializer,
        responses={
            200: DispatchResponseSerializer,
            400: OpenApiResponse(response=DispatchErrorResponseSerializer, description="Invalid payload"),
            401: OpenApiResponse(response=DispatchErrorResponseSerializer, description="Invalid token"),
        },
        tags=["Notifications"],
    )
    def post(self, request):
        if not _verify_bearer(
            request.headers.get("Authorization", ""),
            settings.NOTIFICATION_DISPATCH_TOKEN,
        ):
            return Response({"error": "Invalid token"}, status=status.HTTP_401_UNAUTHORIZED)

        serializer = DispatchRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid payload", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = serializer.validated_data

        if data.get("table"):
            notification = NotificationDispatcher.dispatch_row_change(data["table"], data["record"])
        elif data["type"] == EXPIRY_CHECK:
            result = sweeps.expiry_warnings()
            return Response({"status": "ok", "notified": result["sent"]})
        else:
            notification = NotificationDispatcher.dispatch_money_event(
                event_type=data["type"],
                user_id=data["userId"],
                amount=data["amount"],
                order_id=data["orderId"],
            )

        if notification is None:
            return Response({"status": "ignored"})
        return Response({"status": "queued", "notification_id": str(notification.id)})
