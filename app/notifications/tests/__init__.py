"""
Tests for notifications.

- test_templates.py: Push copy per kind
- test_push_client.py: Expo gateway client
- test_dispatcher.py: Outbox writes, routing and delivery
- test_sweeps.py: Expiry, trending and visitor sweeps
- test_tasks.py: Celery tasks and beat schedules
- test_views.py: Internal dispatch endpoint
"""
