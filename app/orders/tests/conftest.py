"""
Fixtures for order tests.
"""

import pytest

from authentication.tests.factories import ProfileFactory
from orders.tests.factories import OrderFactory


@pytest.fixture
def buyer(db):
    return ProfileFactory()


@pytest.fixture
def seller(db):
    return ProfileFactory(seller=True)


@pytest.fixture
def order(buyer, seller):
    """A pending order between ``buyer`` and ``seller``, with its conversation."""
    return OrderFactory(buyer=buyer, seller=seller)
