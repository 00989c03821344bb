"""
Marketplace models.

This module defines:
- Product: An item listed by a seller
- ProductLike / ProductComment: Engagement on a product
- Follow: One profile following another
- ProductView / ProfileView: One row per viewer per day

Design Decisions:
    - View tables are unique on (target, viewer, day), so a row count is
      a unique-viewer count for that day
    - Table names match the row-change sources the notification
      dispatcher understands ("product_likes", "product_comments", "follows")
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


class Product(UUIDPrimaryKeyMixin, BaseModel):
    """
    An item listed for sale.

    Fields:
        seller: Profile that listed the item
        name: Display name used in notifications
        price: Listed price in major currency units
        is_active: Whether the listing is visible
    """

    seller = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="products",
        help_text="Profile that listed this product",
    )
    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class ProductLike(BaseModel):
    """A profile liking a product."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="likes")
    user = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="product_likes",
    )

    class Meta:
        db_table = "product_likes"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "user"],
                name="unique_product_like",
            ),
        ]


class ProductComment(BaseModel):
    """A comment left on a product."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="product_comments",
    )
    content = models.TextField()

    class Meta:
        db_table = "product_comments"
        ordering = ["-created_at"]


class Follow(BaseModel):
    """
    ``follower`` follows ``following``.

    Self-follows are rejected at the database level.
    """

    follower = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="following_set",
    )
    following = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="follower_set",
    )

    class Meta:
        db_table = "follows"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["follower", "following"],
                name="unique_follow",
            ),
            models.CheckConstraint(
                condition=~models.Q(follower=models.F("following")),
                name="follow_not_self",
            ),
        ]


def _today():
    return timezone.localdate()


class ProductView(BaseModel):
    """One viewer looking at one product on one day."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="views")
    viewer = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="product_views",
    )
    view_date = models.DateField(default=_today, db_index=True)

    class Meta:
        db_table = "product_views"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "viewer", "view_date"],
                name="unique_product_view_per_day",
            ),
        ]


class ProfileView(BaseModel):
    """One viewer visiting one profile (store) on one day."""

    profile = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="profile_views",
    )
    viewer = models.ForeignKey(
        "authentication.Profile",
        on_delete=models.CASCADE,
        related_name="profiles_viewed",
    )
    view_date = models.DateField(default=_today, db_index=True)

    class Meta:
        db_table = "profile_views"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["profile", "viewer", "view_date"],
                name="unique_profile_view_per_day",
            ),
        ]
