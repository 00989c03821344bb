"""
Tests for the scheduled notification sweeps.

Batch delivery is mocked; each test passes an explicit ``today``.
"""

from datetime import date, datetime, timezone

import pytest

from authentication.tests.factories import ProfileFactory
from marketplace.tests.factories import ProductFactory, ProductViewFactory, ProfileViewFactory
from notifications import sweeps
from payments.models import SubscriptionStatus
from payments.tests.factories import SubscriptionFactory

TODAY = date(2026, 7, 10)


def _messages(expo_batch):
    return [message for call in expo_batch.call_args_list for message in call.args[0]]


@pytest.mark.django_db
class TestExpiryWarnings:
    def test_warns_plans_expiring_in_three_days(self, expo_batch):
        expiring = SubscriptionFactory(
            diamond=True, expiry=datetime(2026, 7, 13, 12, 0, tzinfo=timezone.utc)
        )
        SubscriptionFactory(expiry=datetime(2026, 7, 14, 12, 0, tzinfo=timezone.utc))

        result = sweeps.expiry_warnings(today=TODAY)

        assert result == {"candidates": 1, "sent": 1}
        (message,) = _messages(expo_batch)
        assert message.to == expiring.account.push_token
        assert message.body == (
            "Your diamond plan expires in 3 days. Renew now to keep your shop active!"
        )

    def test_skips_inactive_and_tokenless(self, expo_batch):
        expiry = datetime(2026, 7, 13, 9, 0, tzinfo=timezone.utc)
        SubscriptionFactory(expiry=expiry, status=SubscriptionStatus.INACTIVE)
        SubscriptionFactory(expiry=expiry, account=ProfileFactory(push_token=""))

        result = sweeps.expiry_warnings(today=TODAY)

        assert result == {"candidates": 0, "sent": 0}
        expo_batch.assert_not_called()


@pytest.mark.django_db
class TestTrendingAlerts:
    @pytest.fixture(autouse=True)
    def low_threshold(self, settings):
        settings.TRENDING_VIEW_THRESHOLD = 3

    def test_alerts_seller_once_per_day(self, expo_batch):
        product = ProductFactory(name="Sneakers")
        ProductViewFactory.create_batch(3, product=product, view_date=TODAY)

        first = sweeps.trending_alerts(today=TODAY)
        second = sweeps.trending_alerts(today=TODAY)

        assert first["sent"] == 1
        assert second["candidates"] == 0
        (message,) = _messages(expo_batch)
        assert message.to == product.seller.push_token
        assert message.body == "Your 'Sneakers' has received 3 views today. It's hot! ⚡"

    def test_below_threshold_or_other_days_do_not_count(self, expo_batch):
        product = ProductFactory()
        ProductViewFactory.create_batch(2, product=product, view_date=TODAY)
        ProductViewFactory(product=product, view_date=date(2026, 7, 9))

        result = sweeps.trending_alerts(today=TODAY)

        assert result["trending"] == 0
        expo_batch.assert_not_called()


@pytest.mark.django_db
class TestDailyVisitorDigest:
    def test_counts_unique_visitors_per_profile(self, expo_batch):
        seller = ProfileFactory()
        SubscriptionFactory(account=seller)
        shopper = ProfileFactory()
        ProfileViewFactory.create_batch(2, profile=seller, view_date=TODAY)
        ProfileViewFactory(profile=shopper, view_date=TODAY)

        result = sweeps.daily_visitor_digest(today=TODAY)

        assert result == {"candidates": 2, "sent": 2}
        bodies = {message.to: message.body for message in _messages(expo_batch)}
        assert bodies[seller.push_token] == "2 people visited your store today. See who they are!"
        assert bodies[shopper.push_token] == "1 person viewed your profile today. See who they are!"

    def test_nothing_to_send(self, expo_batch):
        assert sweeps.daily_visitor_digest(today=TODAY) == {"candidates": 0, "sent": 0}
        expo_batch.assert_not_called()
