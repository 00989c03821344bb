"""
Fixtures for account tests.
"""

import pytest

from authentication.tests.factories import ProfileFactory


@pytest.fixture
def profile(db):
    """A profile with a push token and no payout recipient."""
    return ProfileFactory()


@pytest.fixture
def seller_profile(db):
    """A profile with a registered payout recipient."""
    return ProfileFactory(seller=True)
