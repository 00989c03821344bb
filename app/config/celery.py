"""
Celery configuration for the settlement backend.

Celery runs everything that happens outside a request:
- Periodic payout batches and stuck-claim reconciliation
- Push notification delivery from the outbox
- Daily and hourly notification sweeps

Redis is both the message broker and result backend. Periodic schedules are
stored in the database by django-celery-beat (see the data migrations in the
payments, orders and notifications apps). Tasks are auto-discovered from all
installed Django apps.

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Celery looks for a tasks.py module in each installed app
app.autodiscover_tasks()
