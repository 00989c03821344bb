"""
Factory Boy factories for payment models.

Usage:
    from payments.tests.factories import SubscriptionFactory, TransactionFactory

    sub = SubscriptionFactory(diamond=True)
    txn = TransactionFactory(reference="ref_123")
"""

from datetime import timedelta
from decimal import Decimal

import factory
from django.utils import timezone

from authentication.tests.factories import ProfileFactory
from payments.models import (
    PlanType,
    Subscription,
    SubscriptionStatus,
    Transaction,
    TransactionStatus,
    TransactionType,
)


class SubscriptionFactory(factory.django.DjangoModelFactory):
    """
    Active standard subscription with 30 days left.

    Traits:
        diamond: Diamond plan, prestige weight 3
    """

    class Meta:
        model = Subscription

    account = factory.SubFactory(ProfileFactory)
    plan = PlanType.STANDARD
    prestige_weight = 2
    expiry = factory.LazyFunction(lambda: timezone.now() + timedelta(days=30))
    status = SubscriptionStatus.ACTIVE
    is_seller = True

    class Params:
        diamond = factory.Trait(plan=PlanType.DIAMOND, prestige_weight=3)


class TransactionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Transaction

    owner = factory.SubFactory(ProfileFactory)
    amount = Decimal("2500.00")
    plan_type = PlanType.STANDARD
    status = TransactionStatus.SUCCESS
    reference = factory.Sequence(lambda n: f"ref_{n:010d}")
    type = TransactionType.SUBSCRIPTION_UPGRADE
