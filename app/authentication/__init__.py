"""
Authentication application.

Email-based users and the Profile that acts as the account for
subscriptions, orders, payouts and push notifications.

Usage:
    from authentication.models import User, Profile
"""
