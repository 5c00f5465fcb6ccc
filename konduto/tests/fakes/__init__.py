"""Fake implementations of core ports for testing.

- FakeApiPort: Canned API responses, captured requests for assertion
- order_payload: A complete, valid order body
"""

from .api import FakeApiPort
from .orders import order_payload

__all__ = ["FakeApiPort", "order_payload"]
