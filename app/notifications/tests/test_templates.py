"""Tests for notification templates."""

from decimal import Decimal

import pytest

from notifications.templates import NotificationKind, format_naira, order_ref, render

ORDER_ID = "1a2b3c4d-0000-4000-8000-000000000000"


class TestFormatNaira:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (5000, "5,000"),
            (Decimal("5000.00"), "5,000"),
            (Decimal("19999.99"), "19,999.99"),
            ("1250000", "1,250,000"),
            (Decimal("0.5"), "0.50"),
        ],
    )
    def test_formats_amounts(self, amount, expected):
        assert format_naira(amount) == expected


def test_order_ref_is_first_eight_characters():
    assert order_ref(ORDER_ID) == "1a2b3c4d"


class TestRender:
    def test_like(self):
        rendered = render(NotificationKind.LIKE, {"product_id": "p1", "product_name": "Ankara Dress"})

        assert rendered.title == "✨ New Like"
        assert rendered.body == "Someone liked your item: Ankara Dress"
        assert rendered.data == {"productId": "p1"}

    def test_new_follower_falls_back_to_someone(self):
        rendered = render(NotificationKind.NEW_FOLLOWER, {"follower_id": "f1"})

        assert rendered.body == "Someone started following you."

    def test_subscription_active(self):
        rendered = render(NotificationKind.SUBSCRIPTION_ACTIVE, {"plan": "diamond"})

        assert rendered.title == "👑 PLAN ACTIVATED"
        assert rendered.body == "Your DIAMOND plan is now active. Your shop is open for business!"
        assert rendered.data == {"screen": "seller/settings"}

    def test_payout_success(self):
        rendered = render(NotificationKind.PAYOUT_SUCCESS, {"amount": Decimal("15000.00"), "order_id": ORDER_ID})

        assert rendered.title == "💰 MONEY SENT TO BANK"
        assert rendered.body == (
            "Success! ₦15,000 has been transferred to your bank for Order #1a2b3c4d."
        )
        assert rendered.data == {"orderId": ORDER_ID, "type": "PAYOUT_SUCCESS"}

    def test_refund_buyer(self):
        rendered = render(NotificationKind.REFUND_BUYER, {"amount": "2500.50", "order_id": ORDER_ID})

        assert "₦2,500.50" in rendered.body
        assert "#1a2b3c4d" in rendered.body

    def test_expiry_warning_default_days(self):
        rendered = render(NotificationKind.EXPIRY_WARNING, {"plan": "standard"})

        assert "expires in 3 days" in rendered.body

    def test_trending_item(self):
        rendered = render(
            NotificationKind.TRENDING_ITEM,
            {"product_id": "p1", "product_name": "Sneakers", "view_count": 57},
        )

        assert rendered.body == "Your 'Sneakers' has received 57 views today. It's hot! ⚡"
        assert rendered.data == {"screen": "ProductDetails", "productId": "p1"}

    @pytest.mark.parametrize(
        "count,is_seller,expected",
        [
            (1, False, "1 person viewed your profile today. See who they are!"),
            (4, True, "4 people visited your store today. See who they are!"),
        ],
    )
    def test_daily_visitors(self, count, is_seller, expected):
        rendered = render(NotificationKind.DAILY_VISITORS, {"count": count, "is_seller": is_seller})

        assert rendered.body == expected

    def test_every_kind_has_a_template(self):
        # Smallest context each template accepts
        context = {
            "product_id": "p",
            "product_name": "n",
            "order_id": ORDER_ID,
            "follower_id": "f",
            "plan": "standard",
            "amount": 1,
            "view_count": 1,
            "count": 1,
        }
        for kind in NotificationKind:
            assert render(kind, context).title

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            render("BIRTHDAY", {})

    def test_missing_placeholder(self):
        with pytest.raises(KeyError):
            render(NotificationKind.LIKE, {"product_id": "p1"})
