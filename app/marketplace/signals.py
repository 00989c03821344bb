"""
Engagement signals.

New likes, comments and follows become push notifications once the row
is committed. The handlers only hand the row to the notification
dispatcher; rendering and delivery happen there.
"""

import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from marketplace.models import Follow, ProductComment, ProductLike

logger = logging.getLogger(__name__)


def _dispatch_after_commit(table: str, record: dict) -> None:
    from notifications.services import NotificationDispatcher

    transaction.on_commit(
        lambda: NotificationDispatcher.dispatch_row_change(table, record),
        robust=True,
    )


@receiver(post_save, sender=ProductLike)
def notify_product_like(sender, instance, created, **kwargs):
    if created:
        _dispatch_after_commit(
            "product_likes",
            {"product_id": str(instance.product_id), "user_id": str(instance.user_id)},
        )


@receiver(post_save, sender=ProductComment)
def notify_product_comment(sender, instance, created, **kwargs):
    if created:
        _dispatch_after_commit(
            "product_comments",
            {"product_id": str(instance.product_id), "user_id": str(instance.user_id)},
        )


@receiver(post_save, sender=Follow)
def notify_new_follower(sender, instance, created, **kwargs):
    if created:
        _dispatch_after_commit(
            "follows",
            {
                "follower_id": str(instance.follower_id),
                "following_id": str(instance.following_id),
            },
        )
