"""Test utilities for roost sites.

Provides an ASGI test client and response assertions::

    from roost.testing import TestClient, assert_served
"""

from roost.testing.assertions import assert_not_found, assert_redirect, assert_served
from roost.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_not_found",
    "assert_redirect",
    "assert_served",
]
