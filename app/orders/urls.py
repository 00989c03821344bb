"""
URL configuration for the orders app.

All routes are prefixed with /api/v1/orders/ when included in the main URLconf.
"""

from django.urls import path

from orders.views import OrderActionView, OrderCreateView, OrderDetailView

app_name = "orders"

urlpatterns = [
    path("", OrderCreateView.as_view(), name="order-create"),
    path("<uuid:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path(
        "<uuid:order_id>/<slug:action>/",
        OrderActionView.as_view(),
        name="order-action",
    ),
]
