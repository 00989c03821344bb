"""
Payments app configuration.

This app provides:
- Paystack webhook handling and the subscription ledger
- Seller payouts for completed orders
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
