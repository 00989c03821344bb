import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("authentication", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PushNotification",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified"),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("LIKE", "New like"),
                            ("COMMENT", "New comment"),
                            ("NEW_ORDER", "New order"),
                            ("NEW_FOLLOWER", "New follower"),
                            ("SUBSCRIPTION_ACTIVE", "Subscription active"),
                            ("PAYOUT_SUCCESS", "Payout sent"),
                            ("REFUND_BUYER", "Refund issued"),
                            ("REFUND_SELLER_ALERT", "Order refunded"),
                            ("EXPIRY_WARNING", "Plan expiring"),
                            ("TRENDING_ITEM", "Trending item"),
                            ("DAILY_VISITORS", "Daily visitors"),
                        ],
                        max_length=30,
                    ),
                ),
                ("title", models.CharField(max_length=200)),
                ("body", models.TextField()),
                ("payload", models.JSONField(blank=True, default=dict)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("sending", "Sending"),
                            ("sent", "Sent"),
                            ("failed", "Failed"),
                            ("skipped", "Skipped"),
                        ],
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("failure_reason", models.TextField(blank=True)),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                (
                    "recipient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="push_notifications",
                        to="authentication.profile",
                    ),
                ),
            ],
            options={
                "db_table": "push_notifications",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "created_at"], name="push_outbox_status_idx"),
                ],
            },
        ),
    ]
