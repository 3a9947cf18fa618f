"""Test utilities for tollgate applications::

    from tollgate.testing import TestClient
"""

from tollgate.testing.client import TestClient

__all__ = ["TestClient"]
