"""
Payments app: Paystack subscriptions and seller payouts.

This app handles:
- Verifying Paystack webhooks and applying subscription upgrades
- Paying sellers for completed orders from the Paystack balance
- Reconciling transfers whose outcome was never learned

Usage:
    from payments.services import SubscriptionLedger
    from payments.workers import process_due_payouts

    SubscriptionLedger.apply_upgrade(profile.pk, "diamond", 500000, "ref_123")
    process_due_payouts.delay()
"""
