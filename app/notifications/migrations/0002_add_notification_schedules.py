"""
Add celery-beat schedules for notification delivery and sweeps.

- Drain Push Outbox: every minute
- Send Trending Alerts: every hour
- Send Expiry Warnings: daily at 09:00
- Send Daily Visitor Digest: daily at 22:00
"""

from django.db import migrations

INTERVAL_TASKS = [
    ("Drain Push Outbox", "notifications.tasks.drain_outbox", 1, "minutes"),
    ("Send Trending Alerts", "notifications.tasks.send_trending_alerts", 1, "hours"),
]

CRONTAB_TASKS = [
    ("Send Expiry Warnings", "notifications.tasks.send_expiry_warnings", "0", "9"),
    ("Send Daily Visitor Digest", "notifications.tasks.send_daily_visitor_digest", "0", "22"),
]


def create_periodic_tasks(apps, schema_editor):
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    CrontabSchedule = apps.get_model("django_celery_beat", "CrontabSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    for name, task, every, period in INTERVAL_TASKS:
        schedule, _ = IntervalSchedule.objects.get_or_create(every=every, period=period)
        PeriodicTask.objects.get_or_create(
            name=name,
            defaults={"task": task, "interval": schedule, "enabled": True},
        )

    for name, task, minute, hour in CRONTAB_TASKS:
        schedule, _ = CrontabSchedule.objects.get_or_create(
            minute=minute,
            hour=hour,
            day_of_week="*",
            day_of_month="*",
            month_of_year="*",
        )
        PeriodicTask.objects.get_or_create(
            name=name,
            defaults={"task": task, "crontab": schedule, "enabled": True},
        )


def remove_periodic_tasks(apps, schema_editor):
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    names = [entry[0] for entry in INTERVAL_TASKS + CRONTAB_TASKS]
    PeriodicTask.objects.filter(name__in=names).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("notifications", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_tasks, remove_periodic_tasks),
    ]
