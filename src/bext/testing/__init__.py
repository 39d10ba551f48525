"""Test utilities for bext applications.

::

    from bext.testing import TestClient
"""

from bext.testing.client import TestClient

__all__ = ["TestClient"]
