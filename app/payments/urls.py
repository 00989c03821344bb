"""
URL configuration for the payments app.

Routes:
    - POST /webhooks/paystack/ - Paystack webhook endpoint

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.
"""

from django.urls import path

from payments.webhooks.views import paystack_webhook

app_name = "payments"

urlpatterns = [
    path("webhooks/paystack/", paystack_webhook, name="paystack_webhook"),
]
