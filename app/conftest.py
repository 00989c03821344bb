"""
Root pytest configuration for the Django project.

App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.test_settings")


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full settlement workflows)
    - test_views.py, test_services.py, test_tasks.py, etc. → integration
    - test_models.py, test_transfer_policy.py, test_signature.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_tasks.py",
        "test_webhooks.py",
        "test_ledger.py",
        "test_payout_executor.py",
        "test_dispatcher.py",
        "test_sweeps.py",
        "test_paystack_adapter.py",
        "test_push_client.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_signals.py",
        "test_signature.py",
        "test_events.py",
        "test_transfer_policy.py",
        "test_templates.py",
        "test_exceptions.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def jwt_client_for():
    """Build an API client authenticated as the given profile via JWT."""
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    def _client(profile):
        client = APIClient()
        refresh = RefreshToken.for_user(profile.user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _client
