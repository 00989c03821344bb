"""
Fixtures for notification tests.

Provides:
- Profiles with and without a registered push token
- A cleared cache for the trending sweep
- A mocked Expo gateway
"""

import pytest
from django.core.cache import cache

from authentication.tests.factories import ProfileFactory


@pytest.fixture
def recipient(db):
    """Profile with a device registered for push."""
    return ProfileFactory(push_token="ExponentPushToken[recipient]")


@pytest.fixture
def silent_recipient(db):
    """Profile that never registered a device."""
    return ProfileFactory(push_token="")


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def expo_send(mocker):
    """Patch single-message delivery to the Expo gateway."""
    return mocker.patch("notifications.services.ExpoPushClient.send")


@pytest.fixture
def expo_batch(mocker):
    """Patch batch delivery; reports every message as accepted."""
    return mocker.patch(
        "notifications.sweeps.ExpoPushClient.send_batch",
        side_effect=lambda messages: len(messages),
    )
