"""
Notifications app: push notification outbox and delivery.

This app provides:
- PushNotification outbox rows written alongside the triggering change
- NotificationDispatcher for rendering, queueing and delivering pushes
- Scheduled sweeps (expiry warnings, trending alerts, visitor digests)
- An internal dispatch endpoint for other services

Usage:
    from notifications.services import NotificationDispatcher

    NotificationDispatcher.dispatch_row_change("follows", {"follower_id": ..., "following_id": ...})
"""
