"""
Add celery-beat schedules for seller payouts.

- Process Due Payouts: every 5 minutes, claims and transfers due payouts
- Reconcile Stuck Payouts: every 15 minutes, verifies ambiguous transfers
"""

from django.db import migrations

SCHEDULES = [
    {
        "name": "Process Due Payouts",
        "task": "payments.workers.payout_executor.process_due_payouts",
        "every": 5,
        "description": (
            "Claims completed orders whose payout eligibility window has passed "
            "and transfers the order total to the seller via Paystack."
        ),
    },
    {
        "name": "Reconcile Stuck Payouts",
        "task": "payments.workers.payout_executor.reconcile_stuck_payouts",
        "every": 15,
        "description": (
            "Verifies payouts left in processing against Paystack and settles "
            "them as paid, failed or requeued."
        ),
    },
]


def create_periodic_tasks(apps, schema_editor):
    """Create the periodic tasks for payouts."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    for entry in SCHEDULES:
        schedule, _ = IntervalSchedule.objects.get_or_create(
            every=entry["every"],
            period="minutes",
        )
        PeriodicTask.objects.get_or_create(
            name=entry["name"],
            defaults={
                "task": entry["task"],
                "interval": schedule,
                "enabled": True,
                "description": entry["description"],
            },
        )


def remove_periodic_tasks(apps, schema_editor):
    """Remove the periodic tasks on migration rollback."""
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    PeriodicTask.objects.filter(name__in=[entry["name"] for entry in SCHEDULES]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("payments", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_tasks, remove_periodic_tasks),
    ]
