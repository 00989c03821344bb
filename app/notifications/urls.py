"""
URL configuration for notifications API.

Routes:
    /dispatch/    - Internal event dispatch (POST, bearer token)
"""

from django.urls import path

from notifications.views import NotificationDispatchView

app_name = "notifications"

urlpatterns = [
    path("dispatch/", NotificationDispatchView.as_view(), name="dispatch"),
]
