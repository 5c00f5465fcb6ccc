"""Shared fixtures for the Konduto test suite."""

import pytest

from konduto.core.models import Order
from konduto.tests.fakes import FakeApiPort
from konduto.tests.fakes.orders import order_payload


@pytest.fixture
def valid_order() -> Order:
    """A valid order ready to be sent."""
    return Order.from_dict(order_payload())


@pytest.fixture
def api() -> FakeApiPort:
    """A fake API port with no queued responses."""
    return FakeApiPort()
