"""
Factory Boy factories for notification models.

Usage:
    from notifications.tests.factories import PushNotificationFactory

    row = PushNotificationFactory(recipient=profile)
    old = PushNotificationFactory(status=PushStatus.SENT)
"""

import factory

from authentication.tests.factories import ProfileFactory
from notifications.models import PushNotification, PushStatus
from notifications.templates import NotificationKind


class PushNotificationFactory(factory.django.DjangoModelFactory):
    """Pending outbox row for a NEW_ORDER push."""

    class Meta:
        model = PushNotification

    recipient = factory.SubFactory(ProfileFactory)
    kind = NotificationKind.NEW_ORDER
    title = "💰 New Order"
    body = "You have a new order! Tap to view details and chat with the buyer."
    payload = factory.LazyFunction(lambda: {"screen": "orders"})
    status = PushStatus.PENDING
