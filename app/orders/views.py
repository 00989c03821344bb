"""
Views for the orders API.

Endpoints:
    POST /api/v1/orders/ - Create an order (caller is the buyer)
    GET /api/v1/orders/{id}/ - Order detail (buyer or seller only)
    POST /api/v1/orders/{id}/confirm-payment/ - Seller confirms payment
    POST /api/v1/orders/{id}/cancel/ - Seller cancels a pending order
    POST /api/v1/orders/{id}/mark-sent/ - Seller marks the order sent
    POST /api/v1/orders/{id}/confirm-receipt/ - Buyer confirms receipt

Errors:
    Service exceptions are rendered with BaseApplicationError.to_dict()
    and the exception's own HTTP status (400/403/404/409).
"""

from __future__ import annotations

import logging

from django.db.models import Q
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError
from orders.models import Order
from orders.serializers import CreateOrderSerializer, ErrorResponseSerializer, OrderSerializer
from orders.services import OrderService

logger = logging.getLogger(__name__)


# URL action slug -> OrderService event
ACTION_EVENTS = {
    "confirm-payment": "confirm_payment",
    "cancel": "cancel",
    "mark-sent": "mark_sent",
    "confirm-receipt": "confirm_receipt",
}


class OrderCreateView(APIView):
    """
    Place an order.

    POST /api/v1/orders/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="create_order",
        summary="Create order",
        request=CreateOrderSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Invalid payload or self-purchase"),
        },
        tags=["Orders"],
    )
    def post(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = OrderService.create_order(
            buyer=request.user.profile,
            seller=serializer.validated_data["seller"],
            total_amount=serializer.validated_data["total_amount"],
            delivery_address=serializer.validated_data["delivery_address"],
        )
        if not result.success:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(result.data).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """
    Read a single order.

    GET /api/v1/orders/{id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_order",
        summary="Get order",
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Not found")},
        tags=["Orders"],
    )
    def get(self, request, order_id):
        profile = request.user.profile
        order = (
            Order.objects.select_related("conversation")
            .filter(Q(buyer=profile) | Q(seller=profile), pk=order_id)
            .first()
        )
        if order is None:
            return Response({"error": "Order not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)


class OrderActionView(APIView):
    """
    Apply a buyer/seller action to an order.

    POST /api/v1/orders/{id}/{action}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="order_action",
        summary="Advance order",
        description=(
            "Actions: confirm-payment, cancel and mark-sent (seller); "
            "confirm-receipt (buyer). Confirming receipt makes the order "
            "eligible for a seller payout."
        ),
        request=None,
        responses={
            200: OrderSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        tags=["Orders"],
    )
    def post(self, request, order_id, action):
        event = ACTION_EVENTS.get(action)
        if event is None:
            return Response(
                {"error": f"Unknown action '{action}'", "error_code": "UNKNOWN_ORDER_EVENT"},
                status=status.HTTP_404_NOT_FOUND,
            )

        try:
            order = OrderService.transition(order_id, event, actor=request.user.profile)
        except BaseApplicationError as e:
            logger.info(
                "Order action rejected",
                extra={"order_id": str(order_id), "event": event, "error_code": e.error_code},
            )
            return Response(e.to_dict(), status=e.http_status)

        return Response(OrderSerializer(order).data)
